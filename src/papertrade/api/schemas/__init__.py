"""Pydantic schemas for API request/response."""

from papertrade.api.schemas.account import AccountResponse
from papertrade.api.schemas.order import (
    TradeRequest,
    OrderCreateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from papertrade.api.schemas.portfolio import HoldingResponse, PortfolioResponse
from papertrade.api.schemas.quote import QuoteResponse, ProfileResponse

__all__ = [
    "AccountResponse",
    "TradeRequest",
    "OrderCreateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "HoldingResponse",
    "PortfolioResponse",
    "QuoteResponse",
    "ProfileResponse",
]
