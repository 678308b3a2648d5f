"""Pydantic schemas for account balance, summary and deposit endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hsa.schemas.common import Money


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    balance: Money
    created_at: datetime


class BalanceResponse(BaseModel):
    account: AccountResponse


class SummaryResponse(BaseModel):
    current_balance: Money
    total_deposits: Money = Field(description="Sum of all deposits")
    total_expenses: Money = Field(description="Sum of approved medical expenses")


class AccountSummaryResponse(BaseModel):
    summary: SummaryResponse


class DepositRequest(BaseModel):
    amount: Money = Field(..., gt=0, decimal_places=2, description="Deposit amount")


class DepositResponse(BaseModel):
    id: UUID
    amount: Money
    new_balance: Money


class SimulatedDepositResponse(DepositResponse):
    bank_verification_steps: list[str]
    status: str = "COMPLETED"


class DepositResult(BaseModel):
    message: str
    deposit: DepositResponse


class SimulatedDepositResult(BaseModel):
    message: str
    deposit: SimulatedDepositResponse
