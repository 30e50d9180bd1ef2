"""Enrollment ORM models"""
from enrollment.infrastructure.persistence.models.billing_assignment_model import BillingAssignmentModel
from enrollment.infrastructure.persistence.models.class_enrollment_model import ClassEnrollmentModel
from enrollment.infrastructure.persistence.models.enrollment_model import EnrollmentModel
from enrollment.infrastructure.persistence.models.program_profile_model import ProgramProfileModel
from enrollment.infrastructure.persistence.models.subscription_model import SubscriptionModel

__all__ = [
    "BillingAssignmentModel",
    "ClassEnrollmentModel",
    "EnrollmentModel",
    "ProgramProfileModel",
    "SubscriptionModel",
]
