"""
Stripe Subscription Gateway
Payment provider adapter over the Stripe SDK async client
"""
from __future__ import annotations

from typing import Any, Optional

import stripe

from shared.config import Settings
from shared.infrastructure.observability.logger import get_logger
from enrollment.domain.errors import BillingProviderError
from enrollment.domain.protocols import ProviderSubscription

logger = get_logger(__name__)


class StripeSubscriptionGateway:
    """
    ``ISubscriptionGateway`` backed by Stripe.

    Every ``stripe.StripeError`` is re-raised as ``BillingProviderError`` with
    the provider's message, so nothing above this adapter imports the SDK.
    """

    def __init__(
        self,
        client: Optional[stripe.StripeClient],
        product_id: Optional[str],
        currency: str = "usd",
        interval: str = "month",
    ) -> None:
        self._client = client
        self._product_id = product_id
        self._currency = currency
        self._interval = interval

    @classmethod
    def from_settings(cls, settings: Settings) -> StripeSubscriptionGateway:
        client = None
        if settings.STRIPE_SECRET_KEY:
            client = stripe.StripeClient(
                settings.STRIPE_SECRET_KEY,
                http_client=stripe.HTTPXClient(),
            )
        else:
            logger.warning("Stripe secret key not configured; billing calls will fail")
        return cls(
            client=client,
            product_id=settings.STRIPE_PRODUCT_ID,
            currency=settings.BILLING_CURRENCY,
            interval=settings.BILLING_INTERVAL,
        )

    @property
    def is_price_configured(self) -> bool:
        return bool(self._product_id)

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            raise BillingProviderError("Billing provider is not configured")
        return self._client

    async def retrieve(self, external_subscription_id: str) -> ProviderSubscription:
        subscription = await self._call(
            "retrieve",
            external_subscription_id,
            self.client.subscriptions.retrieve_async(external_subscription_id),
        )
        # item access by key: ``.items`` is the dict method on StripeObject
        items = subscription["items"]["data"] if subscription.get("items") else []
        return ProviderSubscription(
            id=subscription["id"],
            status=subscription["status"],
            item_ids=tuple(item["id"] for item in items),
        )

    async def replace_item_price(self, external_subscription_id: str, item_id: str, amount: int) -> None:
        if not self._product_id:
            raise BillingProviderError("Billing product is not configured")

        params = {
            "items": [
                {
                    "id": item_id,
                    "price_data": {
                        "product": self._product_id,
                        "unit_amount": amount,
                        "currency": self._currency,
                        "recurring": {"interval": self._interval},
                    },
                }
            ],
            "proration_behavior": "none",
        }
        await self._call(
            "replace_item_price",
            external_subscription_id,
            self.client.subscriptions.update_async(external_subscription_id, params=params),
        )

    async def set_collection_paused(self, external_subscription_id: str, paused: bool) -> None:
        # an empty string unsets pause_collection
        pause_collection: Any = {"behavior": "void"} if paused else ""
        await self._call(
            "set_collection_paused",
            external_subscription_id,
            self.client.subscriptions.update_async(
                external_subscription_id,
                params={"pause_collection": pause_collection},
            ),
        )

    async def cancel(self, external_subscription_id: str) -> None:
        await self._call(
            "cancel",
            external_subscription_id,
            self.client.subscriptions.cancel_async(external_subscription_id),
        )

    async def _call(self, action: str, external_subscription_id: str, request: Any) -> Any:
        try:
            return await request
        except stripe.StripeError as e:
            message = e.user_message or str(e) or e.__class__.__name__
            logger.error(
                "Stripe request failed",
                action=action,
                subscription_id=external_subscription_id,
                stripe_error=e.__class__.__name__,
                error=message,
            )
            raise BillingProviderError(
                message,
                details={"action": action, "subscription_id": external_subscription_id},
            ) from e
