"""
Get Withdraw Family Preview Query
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.application.base_query import BaseQuery
from shared.application.query_handler import QueryHandler

from enrollment.application.dto import FamilyMemberDTO, FamilyWithdrawPreview
from enrollment.application.services.family import Family
from enrollment.domain.errors import FamilyNotFoundError
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.value_objects import FamilyKey


@dataclass(frozen=True)
class GetWithdrawFamilyPreviewQuery(BaseQuery):
    family_reference_id: UUID


class GetWithdrawFamilyPreviewQueryHandler(
    QueryHandler[GetWithdrawFamilyPreviewQuery, FamilyWithdrawPreview]
):
    """Lists the children a family withdrawal would affect."""

    def __init__(self, uow: IEnrollmentUnitOfWork, program: str) -> None:
        self.uow = uow
        self.program = program

    async def handle(self, query: GetWithdrawFamilyPreviewQuery) -> FamilyWithdrawPreview:
        key = FamilyKey.for_reference(self.program, query.family_reference_id)

        async with self.uow:
            family = Family(key, self.uow)
            if not await family.exists():
                raise FamilyNotFoundError(details={"family_reference_id": str(query.family_reference_id)})
            members = await family.active_members()

        return FamilyWithdrawPreview(
            count=len(members),
            students=[FamilyMemberDTO(id=member.id, name=member.full_name) for member in members],
        )
