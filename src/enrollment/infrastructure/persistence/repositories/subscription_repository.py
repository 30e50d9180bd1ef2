"""
Subscription Repository Implementation
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from enrollment.domain.entities import Subscription
from enrollment.domain.types import AUTHORITATIVE_SUBSCRIPTION_STATUSES, SubscriptionStatus
from enrollment.infrastructure.persistence.models import (
    BillingAssignmentModel,
    ProgramProfileModel,
    SubscriptionModel,
)


class SubscriptionRepository(SQLAlchemyRepository[Subscription, SubscriptionModel]):

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=SubscriptionModel,
            entity_class=Subscription,
        )

    def _to_entity(self, model: SubscriptionModel) -> Subscription:
        return Subscription(
            id=model.id,
            external_subscription_id=model.external_subscription_id,
            account_type=model.account_type,
            status=SubscriptionStatus(model.status),
            amount=model.amount,
            currency=model.currency,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Subscription) -> SubscriptionModel:
        return SubscriptionModel(
            id=entity.id,
            external_subscription_id=entity.external_subscription_id,
            account_type=entity.account_type,
            status=entity.status.value,
            amount=entity.amount,
            currency=entity.currency,
            created_at=entity.created_at,
        )

    async def find_authoritative_for_family(
        self,
        family_reference_id: UUID,
        program: str,
        account_type: str,
    ) -> Optional[Subscription]:
        """
        Follow the newest active assignment of any family member to an
        active or paused subscription of ``account_type``.
        """
        stmt = (
            select(SubscriptionModel)
            .join(
                BillingAssignmentModel,
                BillingAssignmentModel.subscription_id == SubscriptionModel.id,
            )
            .join(
                ProgramProfileModel,
                ProgramProfileModel.id == BillingAssignmentModel.program_profile_id,
            )
            .where(
                BillingAssignmentModel.is_active.is_(True),
                ProgramProfileModel.family_reference_id == family_reference_id,
                ProgramProfileModel.program == program,
                SubscriptionModel.account_type == account_type,
                SubscriptionModel.status.in_([s.value for s in AUTHORITATIVE_SUBSCRIPTION_STATUSES]),
            )
            .order_by(BillingAssignmentModel.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None
