"""
Student Profile Repository Implementation
"""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from enrollment.domain.entities import StudentProfile
from enrollment.domain.types import ACTIVE_ENROLLMENT_STATUSES, EnrollmentStatus
from enrollment.domain.value_objects import FamilyKey
from enrollment.infrastructure.persistence.models import ProgramProfileModel

_ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_ENROLLMENT_STATUSES]


class StudentProfileRepository(SQLAlchemyRepository[StudentProfile, ProgramProfileModel]):
    """
    Student profile repository implementation.

    Family queries are built from a ``FamilyKey``: a solo key selects the
    single profile, any other key selects every profile of the program
    sharing the family reference.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=ProgramProfileModel,
            entity_class=StudentProfile,
        )

    def _to_entity(self, model: ProgramProfileModel) -> StudentProfile:
        return StudentProfile(
            id=model.id,
            full_name=model.full_name,
            program=model.program,
            family_reference_id=model.family_reference_id,
            status=EnrollmentStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: StudentProfile) -> ProgramProfileModel:
        return ProgramProfileModel(
            id=entity.id,
            full_name=entity.full_name,
            program=entity.program,
            family_reference_id=entity.family_reference_id,
            status=entity.status.value,
            created_at=entity.created_at,
        )

    @staticmethod
    def _family_clauses(key: FamilyKey) -> list:
        clauses = [ProgramProfileModel.program == key.program]
        if key.is_solo:
            clauses.append(ProgramProfileModel.id == key.solo_student_id)
        else:
            clauses.append(ProgramProfileModel.family_reference_id == key.reference_id)
        return clauses

    async def exists_in_family(self, key: FamilyKey) -> bool:
        stmt = select(ProgramProfileModel.id).where(*self._family_clauses(key)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_active_in_family(self, key: FamilyKey) -> Sequence[StudentProfile]:
        stmt = (
            select(ProgramProfileModel)
            .where(
                *self._family_clauses(key),
                ProgramProfileModel.status.in_(_ACTIVE_STATUS_VALUES),
            )
            .order_by(ProgramProfileModel.created_at)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def count_active_in_family(self, key: FamilyKey) -> int:
        stmt = (
            select(func.count())
            .select_from(ProgramProfileModel)
            .where(
                *self._family_clauses(key),
                ProgramProfileModel.status.in_(_ACTIVE_STATUS_VALUES),
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
