"""
Family roster
"""
from __future__ import annotations

from typing import Sequence

from enrollment.domain.entities import StudentProfile
from enrollment.domain.protocols import IEnrollmentUnitOfWork
from enrollment.domain.value_objects import FamilyKey


class Family:
    """
    Lazily queried view over the profiles sharing a family key.

    Nothing is cached: every call reads through the unit of work's current
    transaction, so a count taken after a write sees that write. Must be
    used inside an ``async with uow`` block.
    """

    def __init__(self, key: FamilyKey, uow: IEnrollmentUnitOfWork) -> None:
        self.key = key
        self._uow = uow

    async def exists(self) -> bool:
        return await self._uow.students.exists_in_family(self.key)

    async def active_members(self) -> Sequence[StudentProfile]:
        return await self._uow.students.list_active_in_family(self.key)

    async def active_count(self) -> int:
        return await self._uow.students.count_active_in_family(self.key)
