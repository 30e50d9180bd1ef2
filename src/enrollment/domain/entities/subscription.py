# src/enrollment/domain/entities/subscription.py
"""Local mirror of a payment-provider subscription."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from ..types import AUTHORITATIVE_SUBSCRIPTION_STATUSES, SubscriptionStatus


@dataclass(slots=True)
class Subscription:
    """
    Family subscription as last written by this service.

    ``amount`` is the blended monthly family amount in minor units. The
    provider is the source of truth; this row records what was last
    applied there.
    """

    id: UUID
    external_subscription_id: str
    account_type: str
    status: SubscriptionStatus
    amount: int
    currency: str = "usd"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @property
    def is_authoritative(self) -> bool:
        return self.status in AUTHORITATIVE_SUBSCRIPTION_STATUSES

    @property
    def is_paused(self) -> bool:
        return self.status is SubscriptionStatus.PAUSED

    @property
    def is_active(self) -> bool:
        return self.status is SubscriptionStatus.ACTIVE

    def mark_canceled(self) -> None:
        self._set_status(SubscriptionStatus.CANCELED)

    def mark_paused(self) -> None:
        self._set_status(SubscriptionStatus.PAUSED)

    def mark_active(self) -> None:
        self._set_status(SubscriptionStatus.ACTIVE)

    def set_amount(self, amount: int) -> None:
        self.amount = amount
        self.updated_at = datetime.now(timezone.utc)

    def _set_status(self, status: SubscriptionStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
