"""
Class Enrollment Repository Implementation
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from enrollment.domain.entities import ClassEnrollment
from enrollment.infrastructure.persistence.models import ClassEnrollmentModel


class ClassEnrollmentRepository(SQLAlchemyRepository[ClassEnrollment, ClassEnrollmentModel]):

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=ClassEnrollmentModel,
            entity_class=ClassEnrollment,
        )

    def _to_entity(self, model: ClassEnrollmentModel) -> ClassEnrollment:
        return ClassEnrollment(
            id=model.id,
            program_profile_id=model.program_profile_id,
            class_id=model.class_id,
            is_active=model.is_active,
            start_date=model.start_date,
            end_date=model.end_date,
        )

    def _to_model(self, entity: ClassEnrollment) -> ClassEnrollmentModel:
        return ClassEnrollmentModel(
            id=entity.id,
            program_profile_id=entity.program_profile_id,
            class_id=entity.class_id,
            is_active=entity.is_active,
            start_date=entity.start_date,
            end_date=entity.end_date,
        )

    async def get_active_for_profile(self, profile_id: UUID) -> Optional[ClassEnrollment]:
        stmt = (
            select(ClassEnrollmentModel)
            .where(
                ClassEnrollmentModel.program_profile_id == profile_id,
                ClassEnrollmentModel.is_active.is_(True),
            )
            .order_by(ClassEnrollmentModel.start_date.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None
