"""Pydantic schemas for market data."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Cached quote in source units (dollars)."""

    model_config = {"from_attributes": True}

    symbol: str
    price: float
    previous_close: float
    change: float
    change_percent: float
    as_of: Optional[datetime] = None


class ProfileResponse(BaseModel):
    """Descriptive profile for a symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    display_name: str
    logo: Optional[str] = None
    sector: Optional[str] = None
