"""
Payment Provider Subscription Gateway Protocol
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ProviderSubscription:
    """Provider-side view of a subscription, reduced to what billing needs."""
    id: str
    status: str
    item_ids: tuple[str, ...] = ()


class ISubscriptionGateway(Protocol):
    """
    Calls to the payment provider.

    Implementations raise ``BillingProviderError`` for every provider-side
    failure; SDK exceptions never leave the adapter.
    """

    @property
    def is_price_configured(self) -> bool:
        """Whether inline prices can be built (a product id is configured)"""
        ...

    async def retrieve(self, external_subscription_id: str) -> ProviderSubscription:
        ...

    async def replace_item_price(
        self,
        external_subscription_id: str,
        item_id: str,
        amount: int,
    ) -> None:
        """Swap the item's price for a monthly inline price of ``amount``, without proration"""
        ...

    async def set_collection_paused(self, external_subscription_id: str, paused: bool) -> None:
        """Pause collection (voiding invoices) or clear the pause"""
        ...

    async def cancel(self, external_subscription_id: str) -> None:
        ...
