"""
Billing DTOs
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from enrollment.domain.types import SubscriptionStatus


@dataclass(frozen=True)
class BillingOutcome:
    """
    Result of applying a billing directive.

    ``updated`` is False whenever the provider or the local mirror did not
    reach the intended state; ``error`` then says why.
    """
    updated: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> BillingOutcome:
        return cls(updated=True)

    @classmethod
    def failed(cls, error: str) -> BillingOutcome:
        return cls(updated=False, error=error)


@dataclass(frozen=True)
class BillingToggleResult:
    """Result of pausing or resuming a family's billing."""
    updated: bool
    status: SubscriptionStatus
    error: Optional[str] = None
