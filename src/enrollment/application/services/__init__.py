"""Enrollment application services"""
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.cross_system_update import (
    CrossSystemResult,
    CrossSystemUpdate,
    TwoStepOutcome,
)
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator

__all__ = [
    "BillingReconciliationEngine",
    "CrossSystemResult",
    "CrossSystemUpdate",
    "Family",
    "FamilySubscriptionLocator",
    "TwoStepOutcome",
]
