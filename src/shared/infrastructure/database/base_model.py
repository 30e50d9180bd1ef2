"""
Declarative base for the enrollment and billing tables
"""
from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Shared columns for profiles, enrollment history, billing assignments
    and subscription mirrors.

    Domain timestamps (``enrolled_at``, ``withdrawn_at``, ``end_date``) live on
    the concrete models; ``created_at`` and ``updated_at`` here are audit only.
    """

    type_annotation_map = {
        UUID: PGUUID(as_uuid=True),
        datetime: DateTime(timezone=True),
    }

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"
