"""
ProgramProfile ORM Model
Maps to program_profiles table
"""
from uuid import UUID

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base


class ProgramProfileModel(Base):
    """
    SQLAlchemy model for program_profiles table.

    One row per child per program. Siblings share ``family_reference_id``.
    """

    __tablename__ = "program_profiles"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    program: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    family_reference_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="REGISTERED")

    def __repr__(self) -> str:
        return f"<ProgramProfileModel(id={self.id}, program={self.program}, status={self.status})>"
