"""Pydantic schemas for virtual card endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CardResponse(BaseModel):
    """Virtual card data for API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    card_number: str = Field(description="16-digit card number")
    cvv: str = Field(description="3-digit security code")
    expiry_date: str = Field(description="Expiry as MM/YYYY")
    is_active: bool = Field(description="Whether card is active")
    created_at: datetime | None = Field(None, description="Card creation timestamp")


class CardResult(BaseModel):
    """Active card lookup; card is null when none was issued."""

    card: CardResponse | None


class CardIssueResult(BaseModel):
    message: str
    card: CardResponse
