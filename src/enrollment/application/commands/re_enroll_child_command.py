"""
Re-enroll Child Command
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.application.base_command import BaseCommand
from shared.application.command_handler import CommandHandler
from shared.infrastructure.observability.logger import get_logger

from enrollment.application.commands.withdraw_child_command import load_program_profile
from enrollment.application.dto import ReEnrollResult
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.entities import BillingAssignment, EnrollmentRecord
from enrollment.domain.errors import NotWithdrawnError
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.services.rate_calculator import calculate_rate
from enrollment.domain.value_objects import BillingAdjustment, FamilyKey

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReEnrollChildCommand(BaseCommand):
    """
    Command to bring a withdrawn student back.

    Billing is always recalculated afterwards.
    """
    student_id: UUID


class ReEnrollChildCommandHandler(CommandHandler[ReEnrollChildCommand, ReEnrollResult]):
    """
    Handler for ReEnrollChildCommand.

    In one transaction: flip the profile back to ENROLLED, open a fresh
    enrollment record and, when the family has a subscription, attach the
    child to it with the rate it adds. Existing siblings' assignment amounts
    are left as they are.
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

    async def handle(self, command: ReEnrollChildCommand) -> ReEnrollResult:
        adjustment = BillingAdjustment.auto_recalculate()

        async with self.uow:
            profile = await load_program_profile(self.uow, command.student_id, self.program)

            if not profile.is_withdrawn:
                raise NotWithdrawnError(details={"student_id": str(profile.id)})

            key = FamilyKey.of(profile)
            family_subscription = await self.locator.find(self.uow, key)

            active_count = await Family(key, self.uow).active_count()
            initial_amount = calculate_rate(active_count + 1)
            self.engine.ensure_price_configurable(adjustment, active_count + 1, family_subscription)

            profile.re_enroll()
            await self.uow.students.update(profile)
            await self.uow.enrollments.add(EnrollmentRecord.open(profile.id))

            if family_subscription is not None:
                await self.uow.billing_assignments.add(
                    BillingAssignment.create(
                        subscription_id=family_subscription.id,
                        program_profile_id=profile.id,
                        amount=initial_amount,
                    )
                )

            await self.uow.commit()

        logger.info(
            "Child re-enrolled",
            student_id=str(profile.id),
            child_name=profile.full_name,
        )

        if family_subscription is None:
            return ReEnrollResult(
                re_enrolled=True,
                billing_updated=False,
                billing_error="No active subscription",
            )

        outcome = await self.engine.apply(key, adjustment, fallback=family_subscription)

        return ReEnrollResult(
            re_enrolled=True,
            billing_updated=outcome.updated,
            billing_error=outcome.error,
        )
