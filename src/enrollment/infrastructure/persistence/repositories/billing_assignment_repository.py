"""
Billing Assignment Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from shared.infrastructure.observability.logger import get_logger
from enrollment.domain.entities import BillingAssignment
from enrollment.infrastructure.persistence.models import BillingAssignmentModel

logger = get_logger(__name__)


class BillingAssignmentRepository(SQLAlchemyRepository[BillingAssignment, BillingAssignmentModel]):
    """
    Billing assignment repository implementation.

    Assignments are never deleted; ending one sets ``is_active`` to false
    and stamps ``end_date``.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=BillingAssignmentModel,
            entity_class=BillingAssignment,
        )

    def _to_entity(self, model: BillingAssignmentModel) -> BillingAssignment:
        return BillingAssignment(
            id=model.id,
            subscription_id=model.subscription_id,
            program_profile_id=model.program_profile_id,
            amount=model.amount,
            is_active=model.is_active,
            start_date=model.start_date,
            end_date=model.end_date,
            created_at=model.created_at,
        )

    def _to_model(self, entity: BillingAssignment) -> BillingAssignmentModel:
        return BillingAssignmentModel(
            id=entity.id,
            subscription_id=entity.subscription_id,
            program_profile_id=entity.program_profile_id,
            amount=entity.amount,
            is_active=entity.is_active,
            start_date=entity.start_date,
            end_date=entity.end_date,
            created_at=entity.created_at,
        )

    async def list_active_for_profile(self, profile_id: UUID) -> Sequence[BillingAssignment]:
        stmt = (
            select(BillingAssignmentModel)
            .where(
                BillingAssignmentModel.program_profile_id == profile_id,
                BillingAssignmentModel.is_active.is_(True),
            )
            .order_by(BillingAssignmentModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def deactivate_all_for_subscription(self, subscription_id: UUID, at: datetime) -> int:
        stmt = (
            update(BillingAssignmentModel)
            .where(
                BillingAssignmentModel.subscription_id == subscription_id,
                BillingAssignmentModel.is_active.is_(True),
            )
            .values(is_active=False, end_date=at)
        )
        result = await self.session.execute(stmt)

        logger.debug(
            "Deactivated billing assignments",
            subscription_id=str(subscription_id),
            count=result.rowcount,
        )
        return result.rowcount
