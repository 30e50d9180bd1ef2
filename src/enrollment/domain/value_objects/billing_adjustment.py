# src/enrollment/domain/value_objects/billing_adjustment.py
"""Billing directive applied after an enrollment change."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from enrollment.domain.errors import InvalidInputError


class AdjustmentKind(str, Enum):
    AUTO_RECALCULATE = "auto_recalculate"
    CANCEL_SUBSCRIPTION = "cancel_subscription"
    KEEP_CURRENT = "keep_current"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BillingAdjustment:
    """
    Tagged union of the four billing directives.

    Only ``custom`` carries an amount (cents). Build instances through the
    classmethods rather than the constructor.
    """

    kind: AdjustmentKind
    amount: int | None = None

    def __post_init__(self) -> None:
        if self.kind is AdjustmentKind.CUSTOM:
            if self.amount is None:
                raise InvalidInputError("Custom billing adjustment requires an amount")
        elif self.amount is not None:
            raise InvalidInputError(f"'{self.kind.value}' does not take an amount")

    @classmethod
    def auto_recalculate(cls) -> BillingAdjustment:
        return cls(AdjustmentKind.AUTO_RECALCULATE)

    @classmethod
    def cancel_subscription(cls) -> BillingAdjustment:
        return cls(AdjustmentKind.CANCEL_SUBSCRIPTION)

    @classmethod
    def keep_current(cls) -> BillingAdjustment:
        return cls(AdjustmentKind.KEEP_CURRENT)

    @classmethod
    def custom(cls, amount: int) -> BillingAdjustment:
        return cls(AdjustmentKind.CUSTOM, amount)

    @property
    def requires_remaining_children(self) -> bool:
        """Directives that only make sense while some child stays billed."""
        return self.kind in (AdjustmentKind.KEEP_CURRENT, AdjustmentKind.CUSTOM)

    def __str__(self) -> str:
        if self.kind is AdjustmentKind.CUSTOM:
            return f"custom({self.amount})"
        return self.kind.value
