"""
Withdrawal DTOs
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class WithdrawPreview:
    """
    What withdrawing one child would do to the family's billing.

    Amounts are minor units. ``recalculated_amount`` uses the same rate
    calculator as the withdrawal itself.
    """
    child_name: str
    active_children_count: int
    current_amount: Optional[int]
    recalculated_amount: int
    rate_description: str
    is_last_active_child: bool
    has_active_subscription: bool
    is_paused: bool


@dataclass(frozen=True)
class FamilyMemberDTO:
    id: UUID
    name: str


@dataclass(frozen=True)
class FamilyWithdrawPreview:
    count: int
    students: list[FamilyMemberDTO] = field(default_factory=list)


@dataclass(frozen=True)
class WithdrawResult:
    withdrawn: bool
    billing_updated: bool
    billing_error: Optional[str] = None


@dataclass(frozen=True)
class WithdrawAllResult:
    withdrawn_count: int
    failed_count: int
    billing_updated: bool
    billing_error: Optional[str] = None


@dataclass(frozen=True)
class ReEnrollResult:
    re_enrolled: bool
    billing_updated: bool
    billing_error: Optional[str] = None
