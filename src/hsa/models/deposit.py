"""Deposit model: append-only log of contributions to an HSA account."""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from hsa.models.base import BaseModel, Cents, utcnow


class Deposit(BaseModel):
    __tablename__ = "deposits"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("hsa_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Cents, nullable=False)
    deposit_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Deposit(id={self.id}, account_id={self.account_id}, amount={self.amount})>"
