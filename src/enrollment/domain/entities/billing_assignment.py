# src/enrollment/domain/entities/billing_assignment.py
"""Link between a student profile and the family subscription."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from ..errors import InvalidInputError


@dataclass(slots=True)
class BillingAssignment:
    """
    Portion of a subscription attributed to one child.

    Assignments are deactivated, never deleted, so the billing history of a
    profile survives withdrawals.
    """

    id: UUID
    subscription_id: UUID
    program_profile_id: UUID
    amount: int
    is_active: bool
    start_date: datetime
    end_date: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        subscription_id: UUID,
        program_profile_id: UUID,
        amount: int,
        at: datetime | None = None,
    ) -> BillingAssignment:
        if amount <= 0:
            raise InvalidInputError(
                "Calculated billing amount must be positive",
                details={"amount": amount},
            )
        now = at or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            subscription_id=subscription_id,
            program_profile_id=program_profile_id,
            amount=amount,
            is_active=True,
            start_date=now,
            created_at=now,
        )

    def deactivate(self, at: datetime) -> None:
        self.is_active = False
        self.end_date = at
