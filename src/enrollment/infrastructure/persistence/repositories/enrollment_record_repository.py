"""
Enrollment Record Repository Implementation
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from enrollment.domain.entities import EnrollmentRecord
from enrollment.domain.types import ACTIVE_ENROLLMENT_STATUSES, EnrollmentStatus
from enrollment.infrastructure.persistence.models import EnrollmentModel


class EnrollmentRecordRepository(SQLAlchemyRepository[EnrollmentRecord, EnrollmentModel]):

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=EnrollmentModel,
            entity_class=EnrollmentRecord,
        )

    def _to_entity(self, model: EnrollmentModel) -> EnrollmentRecord:
        return EnrollmentRecord(
            id=model.id,
            program_profile_id=model.program_profile_id,
            status=EnrollmentStatus(model.status),
            start_date=model.start_date,
            end_date=model.end_date,
            reason=model.reason,
            created_at=model.created_at,
        )

    def _to_model(self, entity: EnrollmentRecord) -> EnrollmentModel:
        return EnrollmentModel(
            id=entity.id,
            program_profile_id=entity.program_profile_id,
            status=entity.status.value,
            start_date=entity.start_date,
            end_date=entity.end_date,
            reason=entity.reason,
            created_at=entity.created_at,
        )

    async def get_open_for_profile(self, profile_id: UUID) -> Optional[EnrollmentRecord]:
        """Newest REGISTERED or ENROLLED record of the profile"""
        stmt = (
            select(EnrollmentModel)
            .where(
                EnrollmentModel.program_profile_id == profile_id,
                EnrollmentModel.status.in_([s.value for s in ACTIVE_ENROLLMENT_STATUSES]),
            )
            .order_by(EnrollmentModel.start_date.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None
