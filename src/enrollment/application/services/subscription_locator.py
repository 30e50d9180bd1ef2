"""
Family Subscription Locator
Finds the single subscription that bills a family
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from enrollment.domain.entities import StudentProfile, Subscription
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.value_objects import FamilyKey
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class FamilySubscriptionLocator:
    """
    Resolves a family's authoritative subscription.

    A family has no subscription foreign key: the subscription is found
    through the newest active billing assignment of any member whose
    subscription is active or paused on the configured provider account.
    Solo students have no family subscription.

    All lookups read through the caller's open unit of work.
    """

    def __init__(self, program: str, account_type: str) -> None:
        self.program = program
        self.account_type = account_type

    async def find(self, uow: IEnrollmentUnitOfWork, key: FamilyKey) -> Optional[Subscription]:
        if key.is_solo:
            return None
        return await uow.subscriptions.find_authoritative_for_family(
            key.reference_id,
            self.program,
            self.account_type,
        )

    async def find_assigned(
        self,
        uow: IEnrollmentUnitOfWork,
        profile_id: UUID,
    ) -> Optional[Subscription]:
        """Authoritative subscription reached through the profile's own active assignments."""
        for assignment in await uow.billing_assignments.list_active_for_profile(profile_id):
            subscription = await uow.subscriptions.get_by_id(assignment.subscription_id)
            if (
                subscription is not None
                and subscription.is_authoritative
                and subscription.account_type == self.account_type
            ):
                return subscription
        return None

    async def find_for_profile(
        self,
        uow: IEnrollmentUnitOfWork,
        profile: StudentProfile,
    ) -> Optional[Subscription]:
        """
        Family subscription of ``profile``, or the one it is billed on directly.

        The second lookup is what reaches a solo student's own subscription.
        """
        subscription = await self.find(uow, FamilyKey.of(profile))
        if subscription is None:
            subscription = await self.find_assigned(uow, profile.id)
            if subscription is not None:
                logger.debug(
                    "Subscription resolved through profile assignment",
                    student_id=str(profile.id),
                    subscription_id=subscription.external_subscription_id,
                )
        return subscription
