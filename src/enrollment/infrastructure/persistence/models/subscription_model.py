"""
Subscription ORM Model
Maps to subscriptions table
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database.base_model import Base


class SubscriptionModel(Base):
    """
    SQLAlchemy model for subscriptions table.

    Local mirror of a payment-provider subscription. ``amount`` is in minor
    units.
    """

    __tablename__ = "subscriptions"

    external_subscription_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    account_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="usd")

    def __repr__(self) -> str:
        return f"<SubscriptionModel(id={self.id}, external_id={self.external_subscription_id}, status={self.status})>"
