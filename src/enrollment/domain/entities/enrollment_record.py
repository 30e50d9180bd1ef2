# src/enrollment/domain/entities/enrollment_record.py
"""Enrollment episode entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from ..types import EnrollmentStatus


@dataclass(slots=True)
class EnrollmentRecord:
    """A single enrollment episode of a profile, closed on withdrawal."""

    id: UUID
    program_profile_id: UUID
    status: EnrollmentStatus
    start_date: datetime
    end_date: datetime | None = None
    reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def open(cls, program_profile_id: UUID, at: datetime | None = None) -> EnrollmentRecord:
        """Start a new episode in ENROLLED status."""
        return cls(
            id=uuid4(),
            program_profile_id=program_profile_id,
            status=EnrollmentStatus.ENROLLED,
            start_date=at or datetime.now(timezone.utc),
        )

    @property
    def is_open(self) -> bool:
        return self.end_date is None

    def close(self, status: EnrollmentStatus, ended_at: datetime, reason: str | None = None) -> None:
        self.status = status
        self.end_date = ended_at
        self.reason = reason
