# src/enrollment/domain/entities/class_enrollment.py
"""Class roster membership entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(slots=True)
class ClassEnrollment:
    id: UUID
    program_profile_id: UUID
    class_id: UUID
    is_active: bool
    start_date: datetime
    end_date: datetime | None = None

    def deactivate(self, at: datetime) -> None:
        self.is_active = False
        self.end_date = at
