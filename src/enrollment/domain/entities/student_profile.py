# src/enrollment/domain/entities/student_profile.py
"""Student enrollment profile entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from ..services.enrollment_rules import EnrollmentRules
from ..types import ACTIVE_ENROLLMENT_STATUSES, EnrollmentStatus


@dataclass(slots=True)
class StudentProfile:
    """
    One child's enrollment in a program.

    ``family_reference_id`` groups siblings for billing; ``None`` means the
    child is billed alone.
    """

    id: UUID
    full_name: str
    program: str
    family_reference_id: UUID | None
    status: EnrollmentStatus
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_ENROLLMENT_STATUSES

    @property
    def is_withdrawn(self) -> bool:
        return self.status is EnrollmentStatus.WITHDRAWN

    def withdraw(self) -> None:
        self._transition_to(EnrollmentStatus.WITHDRAWN)

    def re_enroll(self) -> None:
        self._transition_to(EnrollmentStatus.ENROLLED)

    def _transition_to(self, new_status: EnrollmentStatus) -> None:
        EnrollmentRules.require_valid_transition(self.status, new_status)
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)
