"""Pydantic schemas for order and transaction endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from papertrade.domain.models.enums import OrderSide


class TradeRequest(BaseModel):
    """Request schema for the /buy and /sell shortcuts."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Stock symbol")
    quantity: int = Field(..., gt=0, description="Whole number of shares")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class OrderCreateRequest(TradeRequest):
    """Request schema for placing a market order."""

    side: OrderSide = Field(..., description="BUY or SELL")


class TransactionResponse(BaseModel):
    """Response schema for a single executed transaction (price in cents)."""

    model_config = {"from_attributes": True}

    transaction_id: str
    account_id: str
    symbol: str
    side: OrderSide
    quantity: int
    price: int
    timestamp: datetime


class TransactionListResponse(BaseModel):
    """Response schema for the transaction history, newest first."""

    transactions: list[TransactionResponse]
    count: int
