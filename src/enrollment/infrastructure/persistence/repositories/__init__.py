"""Enrollment repository implementations"""
from enrollment.infrastructure.persistence.repositories.billing_assignment_repository import (
    BillingAssignmentRepository,
)
from enrollment.infrastructure.persistence.repositories.class_enrollment_repository import (
    ClassEnrollmentRepository,
)
from enrollment.infrastructure.persistence.repositories.enrollment_record_repository import (
    EnrollmentRecordRepository,
)
from enrollment.infrastructure.persistence.repositories.student_profile_repository import (
    StudentProfileRepository,
)
from enrollment.infrastructure.persistence.repositories.subscription_repository import (
    SubscriptionRepository,
)

__all__ = [
    "BillingAssignmentRepository",
    "ClassEnrollmentRepository",
    "EnrollmentRecordRepository",
    "StudentProfileRepository",
    "SubscriptionRepository",
]
