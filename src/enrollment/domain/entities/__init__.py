from .billing_assignment import BillingAssignment
from .class_enrollment import ClassEnrollment
from .enrollment_record import EnrollmentRecord
from .student_profile import StudentProfile
from .subscription import Subscription

__all__ = [
    "BillingAssignment",
    "ClassEnrollment",
    "EnrollmentRecord",
    "StudentProfile",
    "Subscription",
]
