# src/enrollment/domain/services/rate_calculator.py
"""
Dugsi tuition rate calculation.

Rates are tiered by the number of active children in a family and are
expressed in cents per month:

- 1st and 2nd child: $80 each
- 3rd child: $70
- 4th and later: $60 each

    1 child  -> 8000
    2 children -> 16000
    3 children -> 23000
    4 children -> 29000
    5 children -> 35000

The withdrawal engine and the withdrawal preview both call
``calculate_rate`` so that a preview never disagrees with the real outcome.
"""

from __future__ import annotations

from dataclasses import dataclass

BASE_RATE = 8000
THIRD_CHILD_RATE = 7000
FOURTH_PLUS_RATE = 6000

# 10 children: $80*2 + $70 + $60*7
MAX_EXPECTED_FAMILY_RATE = 65000

# an override further than this from the calculated rate gets an advisory
OVERRIDE_DEVIATION_THRESHOLD = 0.5


@dataclass(frozen=True)
class RateBreakdown:
    first_two: int
    third: int
    fourth_plus: int
    total: int


@dataclass(frozen=True)
class OverrideCheck:
    valid: bool
    reason: str | None = None


def calculate_rate(child_count: int) -> int:
    """
    Monthly family rate in cents for ``child_count`` active children.

    Total over all integers: anything below one child is 0.
    """
    if child_count <= 0:
        return 0
    return rate_breakdown(child_count).total


def rate_breakdown(child_count: int) -> RateBreakdown:
    """Split the family rate into its tiers for display."""
    if child_count <= 0:
        return RateBreakdown(first_two=0, third=0, fourth_plus=0, total=0)

    first_two = BASE_RATE * min(child_count, 2)
    third = THIRD_CHILD_RATE if child_count >= 3 else 0
    fourth_plus = FOURTH_PLUS_RATE * max(child_count - 3, 0)

    return RateBreakdown(
        first_two=first_two,
        third=third,
        fourth_plus=fourth_plus,
        total=first_two + third + fourth_plus,
    )


def validate_override_amount(override_amount: int, child_count: int) -> OverrideCheck:
    """
    Check an admin-supplied amount.

    Non-positive or fractional amounts are invalid. Valid amounts may still
    carry an advisory ``reason`` when they look unusual.
    """
    if isinstance(override_amount, bool) or not isinstance(override_amount, int):
        return OverrideCheck(valid=False, reason="Override amount must be a whole number")

    if override_amount <= 0:
        return OverrideCheck(valid=False, reason="Override amount must be positive")

    if override_amount > MAX_EXPECTED_FAMILY_RATE:
        return OverrideCheck(
            valid=True,
            reason=f"Override exceeds typical maximum rate of {format_rate(MAX_EXPECTED_FAMILY_RATE)}",
        )

    calculated = calculate_rate(child_count)
    if calculated > 0:
        difference = abs(override_amount - calculated) / calculated
        if difference > OVERRIDE_DEVIATION_THRESHOLD:
            return OverrideCheck(
                valid=True,
                reason=f"Override differs significantly from calculated rate ({format_rate(calculated)})",
            )

    return OverrideCheck(valid=True)


def format_rate(rate_in_cents: int) -> str:
    """Format cents as dollars, e.g. ``8000 -> "$80.00"``."""
    return f"${rate_in_cents / 100:,.2f}"


def rate_tier_description(child_count: int) -> str:
    """Plain-English tier summary shown next to a preview amount."""
    if child_count <= 0:
        return "No children enrolled"
    if child_count == 1:
        return "1 child at $80/month"
    if child_count == 2:
        return "2 children at $80/month each"
    if child_count == 3:
        return "3 children (2 at $80, 1 at $70)"
    return f"{child_count} children (2 at $80, 1 at $70, {child_count - 3} at $60)"
