"""Pydantic schemas for portfolio valuation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """A holding valued at the current price (money in cents)."""

    model_config = {"from_attributes": True}

    symbol: str
    display_name: str
    quantity: int
    average_cost: int
    current_price: int
    current_value: int
    unrealized_change: int
    # Per-share day change in cents; percent in hundredths of a percent
    day_change: int
    day_change_percent: int


class PortfolioResponse(BaseModel):
    """Valued holdings plus cash and aggregate account value."""

    model_config = {"from_attributes": True}

    account_id: str
    cash: int
    holdings: list[HoldingResponse]
    total_value: int
    account_value: int
    as_of: Optional[datetime] = None
