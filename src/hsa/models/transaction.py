"""Transaction model: append-only log of authorization attempts and deposits."""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from hsa.models.base import BaseModel, Cents, utcnow


class TransactionType(str, Enum):
    EXPENSE = "expense"
    DEPOSIT = "deposit"


class Transaction(BaseModel):
    """One row per expense attempt (approved or declined) or mirrored deposit."""

    __tablename__ = "transactions"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("hsa_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    card_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("virtual_cards.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(Cents, nullable=False)
    merchant: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    is_medical_expense: Mapped[bool] = mapped_column(Boolean, nullable=False)
    transaction_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    type: Mapped[str] = mapped_column(
        String(20), default=TransactionType.EXPENSE.value, server_default="expense", nullable=False
    )

    __table_args__ = (
        Index("ix_transactions_account_id_transaction_date", "account_id", "transaction_date"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, merchant={self.merchant}, amount={self.amount}, type={self.type})>"
