# src/enrollment/domain/types.py
"""Enrollment domain enums and status groups."""

from __future__ import annotations

from enum import Enum
from typing import NewType
from uuid import UUID

StudentId = NewType("StudentId", UUID)
FamilyReferenceId = NewType("FamilyReferenceId", UUID)
SubscriptionId = NewType("SubscriptionId", UUID)


class EnrollmentStatus(str, Enum):
    """Lifecycle status shared by student profiles and enrollment records."""
    REGISTERED = "REGISTERED"
    ENROLLED = "ENROLLED"
    WITHDRAWN = "WITHDRAWN"


class SubscriptionStatus(str, Enum):
    """Provider-side subscription status, mirrored locally."""
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELED = "canceled"
    PAST_DUE = "past_due"
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    UNPAID = "unpaid"


ACTIVE_ENROLLMENT_STATUSES: frozenset[EnrollmentStatus] = frozenset(
    {EnrollmentStatus.REGISTERED, EnrollmentStatus.ENROLLED}
)

# at most one subscription in these states is authoritative per family
AUTHORITATIVE_SUBSCRIPTION_STATUSES: frozenset[SubscriptionStatus] = frozenset(
    {SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED}
)
