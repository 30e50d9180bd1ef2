"""
Billing Reconciliation Engine
Applies a billing directive after an enrollment change has committed
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from enrollment.application.dto import BillingOutcome
from enrollment.application.services.cross_system_update import (
    CrossSystemResult,
    CrossSystemUpdate,
)
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.entities import Subscription
from enrollment.domain.errors import (
    BillingNotConfiguredError,
    BillingProviderError,
    NoActiveSubscriptionError,
)
from enrollment.domain.protocols import IEnrollmentUnitOfWork, ISubscriptionGateway
from enrollment.domain.services.rate_calculator import calculate_rate
from enrollment.domain.value_objects import AdjustmentKind, BillingAdjustment, FamilyKey
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class BillingReconciliationEngine:
    """
    Brings the family subscription in line with the family's enrollment.

    The subscription is re-resolved and the active-child count re-derived
    at call time, after the enrollment transaction has committed, so the
    amount always reflects what is actually enrolled. Provider failures
    and divergence are reported through ``BillingOutcome``; they never
    undo the enrollment change.
    """

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        gateway: ISubscriptionGateway,
        locator: FamilySubscriptionLocator,
    ) -> None:
        self.uow = uow
        self.gateway = gateway
        self.locator = locator

    def ensure_price_configurable(
        self,
        adjustment: BillingAdjustment,
        remaining_count: int,
        subscription: Optional[Subscription],
    ) -> None:
        """
        Reject, before any mutation, a directive that would need an inline
        price while no provider product is configured.

        Raises:
            BillingNotConfiguredError
        """
        if subscription is None or self.gateway.is_price_configured:
            return
        if adjustment.kind is AdjustmentKind.CUSTOM or (
            adjustment.kind is AdjustmentKind.AUTO_RECALCULATE and calculate_rate(remaining_count) > 0
        ):
            raise BillingNotConfiguredError(
                "Billing product is not configured; the subscription amount cannot be changed",
                details={"directive": str(adjustment)},
            )

    async def apply(
        self,
        key: FamilyKey,
        adjustment: BillingAdjustment,
        fallback: Optional[Subscription] = None,
    ) -> BillingOutcome:
        """
        Apply ``adjustment`` to the family's subscription.

        Args:
            key: Family whose billing changes
            adjustment: Directive to apply
            fallback: Subscription captured before the enrollment change, used
                when the family no longer resolves to one (its last active
                assignment was just deactivated)
        """
        if adjustment.kind is AdjustmentKind.KEEP_CURRENT:
            return BillingOutcome.ok()

        async with self.uow:
            subscription = await self.locator.find(self.uow, key)

        if subscription is None and fallback is not None:
            # TODO: re-check the fallback's current status before acting on it
            logger.warning(
                "Using pre-transaction subscription fallback",
                family=str(key),
                subscription_id=fallback.external_subscription_id,
            )
            subscription = fallback

        if subscription is None:
            if adjustment.kind is AdjustmentKind.CANCEL_SUBSCRIPTION:
                return BillingOutcome.failed("No active subscription to cancel")
            return BillingOutcome.ok()

        if adjustment.kind is AdjustmentKind.CANCEL_SUBSCRIPTION:
            return await self._cancel(subscription, operation="cancel_subscription")

        if adjustment.kind is AdjustmentKind.CUSTOM:
            new_amount = adjustment.amount
        else:
            async with self.uow:
                active_count = await Family(key, self.uow).active_count()
            new_amount = calculate_rate(active_count)

        if new_amount <= 0:
            if adjustment.kind is AdjustmentKind.AUTO_RECALCULATE:
                return await self._cancel(subscription, operation="auto_recalculate_cancel")
            return BillingOutcome.failed("Calculated amount is zero or negative")

        return await self._update_amount(subscription, new_amount)

    async def set_collection_paused(self, subscription: Subscription, paused: bool) -> CrossSystemResult:
        """Pause or resume collection at the provider, then mirror the status."""
        operation = "pause" if paused else "resume"
        update = CrossSystemUpdate(
            operation=operation,
            external_subscription_id=subscription.external_subscription_id,
            intended_state="status paused" if paused else "status active",
            attempt_external=lambda: self.gateway.set_collection_paused(
                subscription.external_subscription_id, paused
            ),
            attempt_local=lambda: self._write_paused(subscription.id, paused),
        )
        return await update.run()

    # ────────────────────────── provider operations ──────────────────────────

    async def _cancel(self, subscription: Subscription, operation: str) -> BillingOutcome:
        update = CrossSystemUpdate(
            operation=operation,
            external_subscription_id=subscription.external_subscription_id,
            intended_state="cancel subscription",
            attempt_external=lambda: self.gateway.cancel(subscription.external_subscription_id),
            attempt_local=lambda: self._write_canceled(subscription.id),
        )
        result = await update.run()
        if result.succeeded:
            logger.info(
                "Subscription canceled",
                subscription_id=subscription.external_subscription_id,
                operation=operation,
            )
        return BillingOutcome(updated=result.succeeded, error=result.error)

    async def _update_amount(self, subscription: Subscription, new_amount: int) -> BillingOutcome:
        if not self.gateway.is_price_configured:
            return BillingOutcome.failed("Billing product is not configured")

        try:
            provider_subscription = await self.gateway.retrieve(subscription.external_subscription_id)
        except BillingProviderError as e:
            logger.error(
                "Billing adjustment failed",
                subscription_id=subscription.external_subscription_id,
                error=e.message,
            )
            return BillingOutcome.failed(e.message)

        if not provider_subscription.item_ids:
            logger.error(
                "Billing adjustment failed: subscription has no items",
                subscription_id=subscription.external_subscription_id,
            )
            return BillingOutcome.failed("No subscription item found at the billing provider")

        item_id = provider_subscription.item_ids[0]
        update = CrossSystemUpdate(
            operation="amount_update",
            external_subscription_id=subscription.external_subscription_id,
            intended_state=f"set amount to {new_amount}",
            attempt_external=lambda: self.gateway.replace_item_price(
                subscription.external_subscription_id, item_id, new_amount
            ),
            attempt_local=lambda: self._write_amount(subscription.id, new_amount),
            context={"new_amount": new_amount},
        )
        result = await update.run()
        if result.succeeded:
            logger.info(
                "Subscription amount updated",
                subscription_id=subscription.external_subscription_id,
                new_amount=new_amount,
            )
        return BillingOutcome(updated=result.succeeded, error=result.error)

    # ──────────────────────────── local mirror ───────────────────────────────

    async def _load_mirror(self, subscription_id: UUID) -> Subscription:
        subscription = await self.uow.subscriptions.get_by_id(subscription_id)
        if subscription is None:
            raise NoActiveSubscriptionError(f"Subscription {subscription_id} no longer exists locally")
        return subscription

    async def _write_canceled(self, subscription_id: UUID) -> None:
        async with self.uow:
            subscription = await self._load_mirror(subscription_id)
            subscription.mark_canceled()
            await self.uow.subscriptions.update(subscription)
            await self.uow.billing_assignments.deactivate_all_for_subscription(
                subscription_id, datetime.now(timezone.utc)
            )
            await self.uow.commit()

    async def _write_amount(self, subscription_id: UUID, amount: int) -> None:
        async with self.uow:
            subscription = await self._load_mirror(subscription_id)
            subscription.set_amount(amount)
            await self.uow.subscriptions.update(subscription)
            await self.uow.commit()

    async def _write_paused(self, subscription_id: UUID, paused: bool) -> None:
        async with self.uow:
            subscription = await self._load_mirror(subscription_id)
            if paused:
                subscription.mark_paused()
            else:
                subscription.mark_active()
            await self.uow.subscriptions.update(subscription)
            await self.uow.commit()
