# src/enrollment/api/routes.py

from uuid import UUID

from fastapi import APIRouter, Depends, status

import structlog

from enrollment.api.dependencies import get_withdrawal_service
from enrollment.api.schemas import (
    BillingToggleResponse,
    FamilyWithdrawPreviewResponse,
    ReEnrollResponse,
    WithdrawAllResponse,
    WithdrawPreviewResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from enrollment.application.commands import (
    PauseFamilyBillingCommand,
    ReEnrollChildCommand,
    ResumeFamilyBillingCommand,
    WithdrawAllChildrenCommand,
    WithdrawChildCommand,
    WithdrawFamilyCommand,
)
from enrollment.application.queries import (
    GetWithdrawFamilyPreviewQuery,
    GetWithdrawPreviewQuery,
)
from enrollment.application.services.withdrawal_service import WithdrawalService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/dugsi", tags=["Dugsi:Withdrawal"])


# ─────────────────────────────── Students ───────────────────────────────

@router.get("/students/{student_id}/withdraw-preview", response_model=WithdrawPreviewResponse)
async def get_withdraw_preview(
    student_id: UUID,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> WithdrawPreviewResponse:
    """Billing effect of withdrawing the student, without changing anything."""
    preview = await service.get_withdraw_preview(GetWithdrawPreviewQuery(student_id=student_id))
    return WithdrawPreviewResponse.from_dto(preview)


@router.post(
    "/students/{student_id}/withdraw",
    response_model=WithdrawResponse,
    status_code=status.HTTP_200_OK,
)
async def withdraw_child(
    student_id: UUID,
    payload: WithdrawRequest,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> WithdrawResponse:
    """
    Withdraw one student and apply the billing directive.

    A billing failure does not fail the request: the student stays
    withdrawn and the response carries ``billing_error`` and a ``warning``.
    """
    structlog.contextvars.bind_contextvars(student_id=str(student_id))
    result = await service.withdraw_child(
        WithdrawChildCommand(
            student_id=student_id,
            reason=payload.reason,
            reason_note=payload.reason_note,
            billing_adjustment=payload.billing_adjustment.to_domain(),
        )
    )
    if result.billing_error:
        logger.warning("Withdrawal billing update failed", billing_error=result.billing_error)
    return WithdrawResponse.from_result(result)


@router.post("/students/{student_id}/withdraw-all", response_model=WithdrawAllResponse)
async def withdraw_all_children(
    student_id: UUID,
    payload: WithdrawRequest,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> WithdrawAllResponse:
    """Withdraw every active child in the student's family."""
    structlog.contextvars.bind_contextvars(student_id=str(student_id))
    result = await service.withdraw_all_children(
        WithdrawAllChildrenCommand(
            student_id=student_id,
            reason=payload.reason,
            reason_note=payload.reason_note,
            billing_adjustment=payload.billing_adjustment.to_domain(),
        )
    )
    return WithdrawAllResponse.from_result(result)


@router.post("/students/{student_id}/re-enroll", response_model=ReEnrollResponse)
async def re_enroll_child(
    student_id: UUID,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> ReEnrollResponse:
    structlog.contextvars.bind_contextvars(student_id=str(student_id))
    result = await service.re_enroll_child(ReEnrollChildCommand(student_id=student_id))
    return ReEnrollResponse.from_result(result)


# ─────────────────────────────── Families ───────────────────────────────

@router.get(
    "/families/{family_reference_id}/withdraw-preview",
    response_model=FamilyWithdrawPreviewResponse,
)
async def get_withdraw_family_preview(
    family_reference_id: UUID,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> FamilyWithdrawPreviewResponse:
    preview = await service.get_withdraw_family_preview(
        GetWithdrawFamilyPreviewQuery(family_reference_id=family_reference_id)
    )
    return FamilyWithdrawPreviewResponse.from_dto(preview)


@router.post("/families/{family_reference_id}/withdraw", response_model=WithdrawAllResponse)
async def withdraw_family(
    family_reference_id: UUID,
    payload: WithdrawRequest,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> WithdrawAllResponse:
    structlog.contextvars.bind_contextvars(family_reference_id=str(family_reference_id))
    result = await service.withdraw_family(
        WithdrawFamilyCommand(
            family_reference_id=family_reference_id,
            reason=payload.reason,
            reason_note=payload.reason_note,
            billing_adjustment=payload.billing_adjustment.to_domain(),
        )
    )
    return WithdrawAllResponse.from_result(result)


@router.post("/families/{family_reference_id}/billing/pause", response_model=BillingToggleResponse)
async def pause_family_billing(
    family_reference_id: UUID,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> BillingToggleResponse:
    structlog.contextvars.bind_contextvars(family_reference_id=str(family_reference_id))
    result = await service.pause_family_billing(
        PauseFamilyBillingCommand(family_reference_id=family_reference_id)
    )
    return BillingToggleResponse.from_result(result, "paused")


@router.post("/families/{family_reference_id}/billing/resume", response_model=BillingToggleResponse)
async def resume_family_billing(
    family_reference_id: UUID,
    service: WithdrawalService = Depends(get_withdrawal_service),
) -> BillingToggleResponse:
    structlog.contextvars.bind_contextvars(family_reference_id=str(family_reference_id))
    result = await service.resume_family_billing(
        ResumeFamilyBillingCommand(family_reference_id=family_reference_id)
    )
    return BillingToggleResponse.from_result(result, "resumed")
