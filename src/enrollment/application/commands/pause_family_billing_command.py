"""
Pause Family Billing Command
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.application.base_command import BaseCommand
from shared.application.command_handler import CommandHandler
from shared.infrastructure.observability.logger import get_logger

from enrollment.application.dto import BillingToggleResult
from enrollment.application.services.billing_reconciliation import BillingReconciliationEngine
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.entities import Subscription
from enrollment.domain.errors import InvalidInputError, NoActiveSubscriptionError
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.types import SubscriptionStatus
from enrollment.domain.value_objects import FamilyKey

logger = get_logger(__name__)


@dataclass(frozen=True)
class PauseFamilyBillingCommand(BaseCommand):
    family_reference_id: UUID


class FamilyBillingToggleHandler:
    """Shared flow of pausing and resuming collection on a family subscription."""

    paused: bool
    required_status: SubscriptionStatus
    verb: str

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

    async def toggle(self, family_reference_id: UUID) -> BillingToggleResult:
        key = FamilyKey.for_reference(self.program, family_reference_id)

        async with self.uow:
            subscription = await self.locator.find(self.uow, key)

        if subscription is None:
            raise NoActiveSubscriptionError(details={"family_reference_id": str(family_reference_id)})

        if subscription.status is not self.required_status:
            raise InvalidInputError(
                f'Cannot {self.verb} subscription with status "{subscription.status.value}"',
                details={"subscription_id": subscription.external_subscription_id},
            )

        result = await self.engine.set_collection_paused(subscription, self.paused)

        if result.succeeded:
            logger.info(
                f"Family billing {self.verb}d",
                family_reference_id=str(family_reference_id),
                subscription_id=subscription.external_subscription_id,
            )

        return BillingToggleResult(
            updated=result.succeeded,
            status=self._resulting_status(subscription, result.provider_applied),
            error=result.error,
        )

    def _resulting_status(self, subscription: Subscription, provider_applied: bool) -> SubscriptionStatus:
        # after a divergence the provider holds the new status
        if not provider_applied:
            return subscription.status
        return SubscriptionStatus.PAUSED if self.paused else SubscriptionStatus.ACTIVE


class PauseFamilyBillingCommandHandler(
    FamilyBillingToggleHandler,
    CommandHandler[PauseFamilyBillingCommand, BillingToggleResult],
):
    """Handler for PauseFamilyBillingCommand: voids invoices until resumed."""

    paused = True
    required_status = SubscriptionStatus.ACTIVE
    verb = "pause"

    async def handle(self, command: PauseFamilyBillingCommand) -> BillingToggleResult:
        return await self.toggle(command.family_reference_id)
