"""
Withdrawal Service
Entry point for every enrollment-status change and its billing follow-up
"""
from __future__ import annotations

from enrollment.application.commands import (
    PauseFamilyBillingCommand,
    PauseFamilyBillingCommandHandler,
    ReEnrollChildCommand,
    ReEnrollChildCommandHandler,
    ResumeFamilyBillingCommand,
    ResumeFamilyBillingCommandHandler,
    WithdrawAllChildrenCommand,
    WithdrawAllChildrenCommandHandler,
    WithdrawChildCommand,
    WithdrawChildCommandHandler,
    WithdrawFamilyCommand,
    WithdrawFamilyCommandHandler,
)
from enrollment.application.dto import (
    BillingToggleResult,
    FamilyWithdrawPreview,
    ReEnrollResult,
    WithdrawAllResult,
    WithdrawPreview,
    WithdrawResult,
)
from enrollment.application.queries import (
    GetWithdrawFamilyPreviewQuery,
    GetWithdrawFamilyPreviewQueryHandler,
    GetWithdrawPreviewQuery,
    GetWithdrawPreviewQueryHandler,
)
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.protocols import IEnrollmentUnitOfWork, ISubscriptionGateway


class WithdrawalService:
    """
    Facade over the withdrawal commands and queries.

    One instance serves one caller at a time: every handler shares the same
    unit of work, which runs one transaction at a time.
    """

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        gateway: ISubscriptionGateway,
        program: str,
        account_type: str,
    ) -> None:
        locator = FamilySubscriptionLocator(program=program, account_type=account_type)
        engine = BillingReconciliationEngine(uow=uow, gateway=gateway, locator=locator)

        self._withdraw_child = WithdrawChildCommandHandler(uow, engine, locator, program)
        self._withdraw_family = WithdrawFamilyCommandHandler(
            uow, engine, locator, self._withdraw_child, program
        )
        self._withdraw_all_children = WithdrawAllChildrenCommandHandler(
            uow, self._withdraw_family, program
        )
        self._re_enroll_child = ReEnrollChildCommandHandler(uow, engine, locator, program)
        self._pause = PauseFamilyBillingCommandHandler(uow, engine, locator, program)
        self._resume = ResumeFamilyBillingCommandHandler(uow, engine, locator, program)
        self._preview = GetWithdrawPreviewQueryHandler(uow, locator, program)
        self._family_preview = GetWithdrawFamilyPreviewQueryHandler(uow, program)

    async def withdraw_child(self, command: WithdrawChildCommand) -> WithdrawResult:
        return await self._withdraw_child(command)

    async def withdraw_family(self, command: WithdrawFamilyCommand) -> WithdrawAllResult:
        return await self._withdraw_family(command)

    async def withdraw_all_children(self, command: WithdrawAllChildrenCommand) -> WithdrawAllResult:
        return await self._withdraw_all_children(command)

    async def re_enroll_child(self, command: ReEnrollChildCommand) -> ReEnrollResult:
        return await self._re_enroll_child(command)

    async def get_withdraw_preview(self, query: GetWithdrawPreviewQuery) -> WithdrawPreview:
        return await self._preview(query)

    async def get_withdraw_family_preview(
        self, query: GetWithdrawFamilyPreviewQuery
    ) -> FamilyWithdrawPreview:
        return await self._family_preview(query)

    async def pause_family_billing(self, command: PauseFamilyBillingCommand) -> BillingToggleResult:
        return await self._pause(command)

    async def resume_family_billing(self, command: ResumeFamilyBillingCommand) -> BillingToggleResult:
        return await self._resume(command)
