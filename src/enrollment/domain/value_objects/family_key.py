# src/enrollment/domain/value_objects/family_key.py
"""Grouping key for a family of student profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from enrollment.domain.entities.student_profile import StudentProfile


@dataclass(frozen=True)
class FamilyKey:
    """
    Identifies the set of profiles that are billed together.

    A family is not stored anywhere: it is every profile of ``program``
    sharing ``reference_id``. A student without a family reference forms a
    family of one, identified by ``solo_student_id``.
    """

    program: str
    reference_id: UUID | None
    solo_student_id: UUID | None = None

    @classmethod
    def of(cls, profile: StudentProfile) -> FamilyKey:
        if profile.family_reference_id is None:
            return cls(program=profile.program, reference_id=None, solo_student_id=profile.id)
        return cls(program=profile.program, reference_id=profile.family_reference_id)

    @classmethod
    def for_reference(cls, program: str, reference_id: UUID) -> FamilyKey:
        return cls(program=program, reference_id=reference_id)

    @property
    def is_solo(self) -> bool:
        return self.reference_id is None

    def __str__(self) -> str:
        if self.is_solo:
            return f"solo:{self.solo_student_id}"
        return str(self.reference_id)
