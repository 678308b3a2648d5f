"""Transaction request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hsa.schemas.common import Money


class TransactionRequest(BaseModel):
    """Request to charge the virtual card."""

    amount: Money = Field(..., gt=0, decimal_places=2, description="Charge amount")
    merchant: str = Field(..., min_length=1, max_length=255, description="Merchant name")
    category: str = Field(..., min_length=1, max_length=100, description="Expense category code")


class TransactionResponse(BaseModel):
    """A transaction log row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: Money
    merchant: str
    category: str
    is_medical_expense: bool
    transaction_date: datetime
    type: str


class AuthorizedTransactionResponse(TransactionResponse):
    """A transaction log row plus the authorization outcome."""

    new_balance: Money
    status: str = Field(description="APPROVED or DECLINED")
    decline_reason: str | None = Field(
        None, description="Why the charge was declined (insufficient funds or non-qualified expense)"
    )


class TransactionResult(BaseModel):
    message: str
    transaction: AuthorizedTransactionResponse


class RecentTransactionsResult(BaseModel):
    transactions: list[TransactionResponse]


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    is_qualified: bool
    description: str


class CategoryListResult(BaseModel):
    categories: list[CategoryResponse]
