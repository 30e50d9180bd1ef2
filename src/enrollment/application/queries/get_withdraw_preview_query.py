"""
Get Withdraw Preview Query
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.application.base_query import BaseQuery
from shared.application.query_handler import QueryHandler

from enrollment.application.commands.withdraw_child_command import load_program_profile
from enrollment.application.dto import WithdrawPreview
from enrollment.application.services.family import Family
from enrollment.application.services.subscription_locator import FamilySubscriptionLocator
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.services.rate_calculator import calculate_rate, rate_tier_description
from enrollment.domain.value_objects import FamilyKey


@dataclass(frozen=True)
class GetWithdrawPreviewQuery(BaseQuery):
    student_id: UUID


class GetWithdrawPreviewQueryHandler(QueryHandler[GetWithdrawPreviewQuery, WithdrawPreview]):
    """
    Handler for GetWithdrawPreviewQuery.

    Read-only. Resolves the subscription and rate the same way the
    withdrawal does, so the preview matches what confirming it would do.
    """

    def __init__(
        self,
        uow: IEnrollmentUnitOfWork,
        locator: FamilySubscriptionLocator,
        program: str,
    ) -> None:
        self.uow = uow
        self.locator = locator
        self.program = program

    async def handle(self, query: GetWithdrawPreviewQuery) -> WithdrawPreview:
        async with self.uow:
            profile = await load_program_profile(self.uow, query.student_id, self.program)

            active_count = await Family(FamilyKey.of(profile), self.uow).active_count()
            # a withdrawn child does not lower the count again
            after_withdrawal_count = max(active_count - (1 if profile.is_active else 0), 0)

            subscription = await self.locator.find_for_profile(self.uow, profile)

        return WithdrawPreview(
            child_name=profile.full_name,
            active_children_count=active_count,
            current_amount=subscription.amount if subscription else None,
            recalculated_amount=calculate_rate(after_withdrawal_count),
            rate_description=rate_tier_description(after_withdrawal_count),
            is_last_active_child=after_withdrawal_count == 0,
            has_active_subscription=subscription is not None and subscription.is_authoritative,
            is_paused=subscription is not None and subscription.is_paused,
        )
