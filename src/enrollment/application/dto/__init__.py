"""Enrollment application DTOs"""
from enrollment.application.dto.billing_dto import BillingOutcome, BillingToggleResult
from enrollment.application.dto.withdrawal_dto import (
    FamilyMemberDTO,
    FamilyWithdrawPreview,
    ReEnrollResult,
    WithdrawAllResult,
    WithdrawPreview,
    WithdrawResult,
)

__all__ = [
    "BillingOutcome",
    "BillingToggleResult",
    "FamilyMemberDTO",
    "FamilyWithdrawPreview",
    "ReEnrollResult",
    "WithdrawAllResult",
    "WithdrawPreview",
    "WithdrawResult",
]
