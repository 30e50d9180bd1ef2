# src/enrollment/domain/services/batch_policy.py
"""Billing policy for whole-family withdrawals."""

from __future__ import annotations

from ..value_objects.billing_adjustment import AdjustmentKind, BillingAdjustment


def resolve_batch_adjustment(requested: BillingAdjustment, failed_count: int) -> BillingAdjustment:
    """
    Directive to apply once a family batch withdrawal has finished.

    Cancelling the subscription while some children are still enrolled would
    leave them unbilled, so a requested cancel is downgraded to a
    recalculation whenever any member failed to withdraw. Every other
    directive is applied as requested.
    """
    if failed_count > 0 and requested.kind is AdjustmentKind.CANCEL_SUBSCRIPTION:
        return BillingAdjustment.auto_recalculate()
    return requested
