"""
Withdraw Child Command
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from shared.application.base_command import BaseCommand
from shared.application.command_handler import CommandHandler
from shared.infrastructure.observability.logger import get_logger

from enrollment.application.dto import WithdrawResult
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.entities import StudentProfile
from enrollment.domain.errors import (
    AlreadyWithdrawnError,
    InvalidInputError,
    StudentNotFoundError,
)
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.services.rate_calculator import validate_override_amount
from enrollment.domain.types import EnrollmentStatus
from enrollment.domain.value_objects import (
    AdjustmentKind,
    BillingAdjustment,
    FamilyKey,
    WithdrawalReason,
    build_reason_label,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class WithdrawChildCommand(BaseCommand):
    """
    Command to withdraw one student from the program.

    Attributes:
        student_id: Profile UUID
        reason: Withdrawal reason code
        billing_adjustment: Directive applied to the family subscription afterwards
        reason_note: Optional free text appended to the reason label
        skip_last_child_guard: Set by family withdrawals, which withdraw every
            child with ``keep_current`` and settle billing once at the end
    """
    student_id: UUID
    reason: WithdrawalReason
    billing_adjustment: BillingAdjustment
    reason_note: Optional[str] = None
    skip_last_child_guard: bool = False


async def load_program_profile(
    uow: IEnrollmentUnitOfWork,
    student_id: UUID,
    program: str,
) -> StudentProfile:
    """Profile of ``student_id`` in ``program`` or ``StudentNotFoundError``."""
    profile = await uow.students.get_by_id(student_id)
    if profile is None or profile.program != program:
        raise StudentNotFoundError(details={"student_id": str(student_id)})
    return profile


class WithdrawChildCommandHandler(CommandHandler[WithdrawChildCommand, WithdrawResult]):
    """
    Handler for WithdrawChildCommand.

    Validates every precondition, withdraws the child in one transaction
    (profile, open enrollment record, billing assignments, class roster)
    and then hands the billing directive to the reconciliation engine.
    """

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        engine: BillingReconciliationEngine,
        locator: FamilySubscriptionLocator,
        program: str,
    ) -> None:
        self.uow = uow
        self.engine = engine
        self.locator = locator
        self.program = program

    async def handle(self, command: WithdrawChildCommand) -> WithdrawResult:
        adjustment = command.billing_adjustment
        reason_label = build_reason_label(command.reason, command.reason_note)

        async with self.uow:
            profile = await load_program_profile(self.uow, command.student_id, self.program)

            if profile.is_withdrawn:
                raise AlreadyWithdrawnError(details={"student_id": str(profile.id)})

            key = FamilyKey.of(profile)
            active_count = await Family(key, self.uow).active_count()

            if not command.skip_last_child_guard and adjustment.requires_remaining_children:
                if active_count <= 1:
                    raise InvalidInputError(
                        f'Cannot use "{adjustment.kind.value}" when withdrawing the last active child',
                        details={"student_id": str(profile.id)},
                    )

            remaining_count = max(active_count - 1, 0)
            if adjustment.kind is AdjustmentKind.CUSTOM:
                self._check_custom_amount(adjustment.amount, remaining_count, profile)

            # the assignment is deactivated below; keep its subscription as a fallback
            pre_transaction_subscription = await self.locator.find_for_profile(self.uow, profile)
            self.engine.ensure_price_configurable(adjustment, remaining_count, pre_transaction_subscription)

            await self._withdraw(profile, reason_label)
            await self.uow.commit()

        logger.info(
            "Child withdrawn",
            student_id=str(profile.id),
            child_name=profile.full_name,
            reason=command.reason.value,
        )

        outcome = await self.engine.apply(key, adjustment, fallback=pre_transaction_subscription)

        return WithdrawResult(
            withdrawn=True,
            billing_updated=outcome.updated,
            billing_error=outcome.error,
        )

    async def _withdraw(self, profile: StudentProfile, reason_label: str) -> None:
        now = datetime.now(timezone.utc)

        profile.withdraw()
        await self.uow.students.update(profile)

        record = await self.uow.enrollments.get_open_for_profile(profile.id)
        if record is not None:
            record.close(EnrollmentStatus.WITHDRAWN, now, reason_label)
            await self.uow.enrollments.update(record)

        for assignment in await self.uow.billing_assignments.list_active_for_profile(profile.id):
            assignment.deactivate(now)
            await self.uow.billing_assignments.update(assignment)

        class_enrollment = await self.uow.class_enrollments.get_active_for_profile(profile.id)
        if class_enrollment is not None:
            class_enrollment.deactivate(now)
            await self.uow.class_enrollments.update(class_enrollment)

    @staticmethod
    def _check_custom_amount(amount: int, remaining_count: int, profile: StudentProfile) -> None:
        check = validate_override_amount(amount, remaining_count)
        if not check.valid:
            raise InvalidInputError(check.reason, details={"amount": amount})
        if check.reason:
            logger.warning(
                "Unusual custom billing amount",
                student_id=str(profile.id),
                amount=amount,
                advisory=check.reason,
            )
