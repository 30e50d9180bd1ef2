"""Enrollment infrastructure adapters"""
from enrollment.infrastructure.adapters.enrollment_unit_of_work import EnrollmentUnitOfWork
from enrollment.infrastructure.adapters.stripe_subscription_gateway import StripeSubscriptionGateway

__all__ = ["EnrollmentUnitOfWork", "StripeSubscriptionGateway"]
