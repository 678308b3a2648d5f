"""HSA account model holding the single balance of a user."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hsa.models.base import Cents, TimestampedModel


class HSAAccount(TimestampedModel):
    """Health Savings Account. One per user."""

    __tablename__ = "hsa_accounts"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    balance: Mapped[Decimal] = mapped_column(
        Cents, default=Decimal("0.00"), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="account")
    cards: Mapped[list["VirtualCard"]] = relationship(
        "VirtualCard", back_populates="account", lazy="selectin", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<HSAAccount(id={self.id}, user_id={self.user_id}, balance={self.balance})>"
