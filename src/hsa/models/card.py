"""Virtual card model issued against an HSA account."""
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hsa.models.base import TimestampedModel


class VirtualCard(TimestampedModel):
    """Virtual debit card. At most one active card per account."""

    __tablename__ = "virtual_cards"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("hsa_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    card_number: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    cvv: Mapped[str] = mapped_column(String(3), nullable=False)
    expiry_date: Mapped[str] = mapped_column(String(7), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index(
            "uq_virtual_cards_one_active_per_account",
            "account_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    # Relationships
    account: Mapped["HSAAccount"] = relationship("HSAAccount", back_populates="cards")

    def __repr__(self) -> str:
        return f"<VirtualCard(id={self.id}, last_four={self.card_number[-4:]}, is_active={self.is_active})>"
