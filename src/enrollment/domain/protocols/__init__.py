"""Enrollment Domain Protocols"""
from enrollment.domain.protocols.repositories import (
    IBillingAssignmentRepository,
    IClassEnrollmentRepository,
    IEnrollmentRecordRepository,
    IStudentProfileRepository,
    ISubscriptionRepository,
)
from enrollment.domain.protocols.subscription_gateway import (
    ISubscriptionGateway,
    ProviderSubscription,
)
from enrollment.domain.protocols.unit_of_work import IEnrollmentUnitOfWork

__all__ = [
    "IBillingAssignmentRepository",
    "IClassEnrollmentRepository",
    "IEnrollmentRecordRepository",
    "IStudentProfileRepository",
    "ISubscriptionRepository",
    "IEnrollmentUnitOfWork",
    "ISubscriptionGateway",
    "ProviderSubscription",
]
