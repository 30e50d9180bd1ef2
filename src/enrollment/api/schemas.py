"""
Dugsi Withdrawal API Schemas
"""
from __future__ import annotations

from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from enrollment.application.dto import (
    BillingToggleResult,
    FamilyWithdrawPreview,
    ReEnrollResult,
    WithdrawAllResult,
    WithdrawPreview,
    WithdrawResult,
)
from enrollment.domain.types import SubscriptionStatus
from enrollment.domain.value_objects import (
    MAX_REASON_NOTE_LENGTH,
    BillingAdjustment,
    WithdrawalReason,
)


# ─────────────────────────── Billing directives ───────────────────────────

class AutoRecalculateAdjustment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["auto_recalculate"]

    def to_domain(self) -> BillingAdjustment:
        return BillingAdjustment.auto_recalculate()


class CancelSubscriptionAdjustment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["cancel_subscription"]

    def to_domain(self) -> BillingAdjustment:
        return BillingAdjustment.cancel_subscription()


class KeepCurrentAdjustment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["keep_current"]

    def to_domain(self) -> BillingAdjustment:
        return BillingAdjustment.keep_current()


class CustomAdjustment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["custom"]
    amount: int = Field(..., gt=0, strict=True, description="New monthly family amount in cents")

    def to_domain(self) -> BillingAdjustment:
        return BillingAdjustment.custom(self.amount)


BillingAdjustmentSchema = Annotated[
    Union[
        AutoRecalculateAdjustment,
        CancelSubscriptionAdjustment,
        KeepCurrentAdjustment,
        CustomAdjustment,
    ],
    Field(discriminator="type"),
]


# ───────────────────────────────── Requests ─────────────────────────────────

class WithdrawRequest(BaseModel):
    """Withdraw one child, or every child of a family"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    reason: WithdrawalReason = Field(..., description="Withdrawal reason code")
    reason_note: Optional[str] = Field(None, max_length=MAX_REASON_NOTE_LENGTH)
    billing_adjustment: BillingAdjustmentSchema


# ──────────────────────────────── Responses ─────────────────────────────────

class WithdrawPreviewResponse(BaseModel):
    child_name: str
    active_children_count: int
    current_amount: Optional[int] = Field(None, description="Current family amount in cents")
    recalculated_amount: int = Field(..., description="Family amount in cents after the withdrawal")
    rate_description: str = Field(..., description="Tier summary for the family after the withdrawal")
    is_last_active_child: bool
    has_active_subscription: bool
    is_paused: bool

    @classmethod
    def from_dto(cls, preview: WithdrawPreview) -> WithdrawPreviewResponse:
        return cls(
            child_name=preview.child_name,
            active_children_count=preview.active_children_count,
            current_amount=preview.current_amount,
            recalculated_amount=preview.recalculated_amount,
            rate_description=preview.rate_description,
            is_last_active_child=preview.is_last_active_child,
            has_active_subscription=preview.has_active_subscription,
            is_paused=preview.is_paused,
        )


class FamilyMemberResponse(BaseModel):
    id: UUID
    name: str


class FamilyWithdrawPreviewResponse(BaseModel):
    count: int
    students: list[FamilyMemberResponse]

    @classmethod
    def from_dto(cls, preview: FamilyWithdrawPreview) -> FamilyWithdrawPreviewResponse:
        return cls(
            count=preview.count,
            students=[FamilyMemberResponse(id=s.id, name=s.name) for s in preview.students],
        )


class WithdrawResponse(BaseModel):
    withdrawn: bool
    billing_updated: bool
    billing_error: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: WithdrawResult) -> WithdrawResponse:
        return cls(
            withdrawn=result.withdrawn,
            billing_updated=result.billing_updated,
            billing_error=result.billing_error,
            warning=(
                f"Child withdrawn but billing update failed: {result.billing_error}"
                if result.billing_error
                else None
            ),
        )


class WithdrawAllResponse(BaseModel):
    withdrawn_count: int
    failed_count: int
    billing_updated: bool
    billing_error: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: WithdrawAllResult) -> WithdrawAllResponse:
        return cls(
            withdrawn_count=result.withdrawn_count,
            failed_count=result.failed_count,
            billing_updated=result.billing_updated,
            billing_error=result.billing_error,
            warning=(
                f"{result.withdrawn_count} child(ren) withdrawn but billing update failed: "
                f"{result.billing_error}"
                if result.billing_error
                else None
            ),
        )


class ReEnrollResponse(BaseModel):
    re_enrolled: bool
    billing_updated: bool
    billing_error: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: ReEnrollResult) -> ReEnrollResponse:
        return cls(
            re_enrolled=result.re_enrolled,
            billing_updated=result.billing_updated,
            billing_error=result.billing_error,
            warning=(
                f"Child re-enrolled but billing update failed: {result.billing_error}"
                if result.billing_error
                else None
            ),
        )


class BillingToggleResponse(BaseModel):
    updated: bool
    status: SubscriptionStatus
    error: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: BillingToggleResult, verb: str) -> BillingToggleResponse:
        return cls(
            updated=result.updated,
            status=result.status,
            error=result.error,
            warning=(
                f"Billing {verb} at the provider but local sync failed: {result.error}"
                if result.error and result.status is _STATUS_AFTER[verb]
                else None
            ),
        )


_STATUS_AFTER = {
    "paused": SubscriptionStatus.PAUSED,
    "resumed": SubscriptionStatus.ACTIVE,
}
