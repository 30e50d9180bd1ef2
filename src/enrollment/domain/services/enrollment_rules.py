# src/enrollment/domain/services/enrollment_rules.py
"""Enrollment lifecycle rules domain service."""

from ..errors import InvalidTransitionError
from ..types import EnrollmentStatus


class EnrollmentRules:
    """Business rules for student enrollment status transitions."""

    # Withdrawn students can come back any number of times; there is no terminal state.
    VALID_TRANSITIONS: dict[EnrollmentStatus, set[EnrollmentStatus]] = {
        EnrollmentStatus.REGISTERED: {EnrollmentStatus.ENROLLED, EnrollmentStatus.WITHDRAWN},
        EnrollmentStatus.ENROLLED: {EnrollmentStatus.WITHDRAWN},
        EnrollmentStatus.WITHDRAWN: {EnrollmentStatus.ENROLLED},
    }

    @classmethod
    def can_transition_to(
        cls,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus
    ) -> bool:
        """Check if transition between statuses is valid."""
        return to_status in cls.VALID_TRANSITIONS.get(from_status, set())

    @classmethod
    def require_valid_transition(
        cls,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus
    ) -> None:
        """Require transition to be valid or raise InvalidTransitionError."""
        if not cls.can_transition_to(from_status, to_status):
            valid_transitions = sorted(s.value for s in cls.VALID_TRANSITIONS.get(from_status, set()))
            raise InvalidTransitionError(
                f"Invalid enrollment status transition from {from_status.value} to {to_status.value}. "
                f"Valid transitions: {valid_transitions}"
            )
