"""
Withdraw Family Commands
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.application.base_command import BaseCommand
from shared.application.command_handler import CommandHandler
from shared.exceptions import DomainError
from shared.infrastructure.observability.logger import get_logger

from enrollment.application.commands.withdraw_child_command import (
    WithdrawChildCommand,
    WithdrawChildCommandHandler,
    load_program_profile,
)
from enrollment.application.dto import WithdrawAllResult
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.errors import AlreadyWithdrawnError, FamilyNotFoundError, InvalidInputError
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.services.batch_policy import resolve_batch_adjustment
from enrollment.domain.services.rate_calculator import validate_override_amount
from enrollment.domain.value_objects import (
    AdjustmentKind,
    BillingAdjustment,
    FamilyKey,
    WithdrawalReason,
    build_reason_label,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class WithdrawFamilyCommand(BaseCommand):
    """
    Command to withdraw every active child of a family.

    Attributes:
        family_reference_id: Family reference shared by the siblings
        reason: Withdrawal reason code applied to every child
        billing_adjustment: Directive applied once after all children
        reason_note: Optional free text appended to the reason label
    """
    family_reference_id: UUID
    reason: WithdrawalReason
    billing_adjustment: BillingAdjustment
    reason_note: Optional[str] = None


@dataclass(frozen=True)
class WithdrawAllChildrenCommand(BaseCommand):
    """Same as WithdrawFamilyCommand, with the family resolved from one of its students."""
    student_id: UUID
    reason: WithdrawalReason
    billing_adjustment: BillingAdjustment
    reason_note: Optional[str] = None


class WithdrawFamilyCommandHandler(CommandHandler[WithdrawFamilyCommand, WithdrawAllResult]):
    """
    Handler for WithdrawFamilyCommand.

    Children are withdrawn one at a time, each in its own transaction, with
    ``keep_current`` billing. A failed child does not stop the batch. The
    requested directive is applied once at the end against the subscription
    resolved before the loop.
    """

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        engine: BillingReconciliationEngine,
        locator: FamilySubscriptionLocator,
        withdraw_child: WithdrawChildCommandHandler,
        program: str,
    ) -> None:
        self.uow = uow
        self.engine = engine
        self.locator = locator
        self.withdraw_child = withdraw_child
        self.program = program

    async def handle(self, command: WithdrawFamilyCommand) -> WithdrawAllResult:
        key = FamilyKey.for_reference(self.program, command.family_reference_id)
        return await self.withdraw_members(
            key,
            reason=command.reason,
            reason_note=command.reason_note,
            billing_adjustment=command.billing_adjustment,
        )

    async def withdraw_members(
        self,
        key: FamilyKey,
        reason: WithdrawalReason,
        reason_note: Optional[str],
        billing_adjustment: BillingAdjustment,
    ) -> WithdrawAllResult:
        # fail fast on a bad note instead of once per child
        build_reason_label(reason, reason_note)

        async with self.uow:
            family = Family(key, self.uow)
            if not await family.exists():
                raise FamilyNotFoundError(details={"family_reference_id": str(key)})

            members = await family.active_members()
            if not members:
                raise AlreadyWithdrawnError(
                    "No active children to withdraw",
                    details={"family_reference_id": str(key)},
                )

            pre_withdrawal_subscription = await self.locator.find(self.uow, key)
            if pre_withdrawal_subscription is None and key.is_solo:
                pre_withdrawal_subscription = await self.locator.find_assigned(self.uow, members[0].id)

            if billing_adjustment.kind is AdjustmentKind.CUSTOM:
                check = validate_override_amount(billing_adjustment.amount, 0)
                if not check.valid:
                    raise InvalidInputError(check.reason, details={"amount": billing_adjustment.amount})
                self.engine.ensure_price_configurable(billing_adjustment, 0, pre_withdrawal_subscription)

        withdrawn_count = 0
        failed_count = 0

        for member in members:
            try:
                await self.withdraw_child(
                    WithdrawChildCommand(
                        student_id=member.id,
                        reason=reason,
                        reason_note=reason_note,
                        billing_adjustment=BillingAdjustment.keep_current(),
                        skip_last_child_guard=True,
                    )
                )
                withdrawn_count += 1
            except DomainError as e:
                failed_count += 1
                logger.warning(
                    "Expected failure in bulk withdrawal",
                    student_id=str(member.id),
                    error=e.message,
                )
            except Exception as e:
                failed_count += 1
                logger.error(
                    "Unexpected failure in bulk withdrawal",
                    student_id=str(member.id),
                    error=str(e),
                    exc_info=True,
                )

        effective_adjustment = resolve_batch_adjustment(billing_adjustment, failed_count)
        if effective_adjustment != billing_adjustment:
            logger.warning(
                "Downgraded cancel_subscription to auto_recalculate due to partial failure",
                family=str(key),
                withdrawn_count=withdrawn_count,
                failed_count=failed_count,
            )

        outcome = await self.engine.apply(key, effective_adjustment, fallback=pre_withdrawal_subscription)

        logger.info(
            "Bulk withdrawal completed",
            family=str(key),
            withdrawn_count=withdrawn_count,
            failed_count=failed_count,
        )

        billing_error = outcome.error
        if billing_error is None and failed_count > 0:
            billing_error = f"{failed_count} child(ren) could not be withdrawn"

        return WithdrawAllResult(
            withdrawn_count=withdrawn_count,
            failed_count=failed_count,
            billing_updated=outcome.updated,
            billing_error=billing_error,
        )


class WithdrawAllChildrenCommandHandler(CommandHandler[WithdrawAllChildrenCommand, WithdrawAllResult]):
    """Handler for WithdrawAllChildrenCommand; a solo student is a family of one."""

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        withdraw_family: WithdrawFamilyCommandHandler,
        program: str,
    ) -> None:
        self.uow = uow
        self.withdraw_family = withdraw_family
        self.program = program

    async def handle(self, command: WithdrawAllChildrenCommand) -> WithdrawAllResult:
        async with self.uow:
            profile = await load_program_profile(self.uow, command.student_id, self.program)

        return await self.withdraw_family.withdraw_members(
            FamilyKey.of(profile),
            reason=command.reason,
            reason_note=command.reason_note,
            billing_adjustment=command.billing_adjustment,
        )
