"""View models for market data and portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Quote:
    """
    Point-in-time price snapshot for a symbol.

    Amounts are floats in source units (dollars); callers convert with
    ``to_cents`` at the point of use.
    """

    symbol: str
    price: float
    previous_close: float
    change: float
    change_percent: float
    as_of: Optional[datetime] = None


@dataclass(frozen=True)
class Profile:
    """Descriptive metadata for a symbol."""

    symbol: str
    display_name: str
    logo: Optional[str] = None
    sector: Optional[str] = None


@dataclass
class HoldingValuation:
    """A holding enriched with its current quote (all money in cents)."""

    symbol: str
    display_name: str
    quantity: int
    average_cost: int
    current_price: int
    current_value: int
    unrealized_change: int
    day_change: int
    day_change_percent: int


@dataclass
class PortfolioView:
    """Valuation of every holding of one account."""

    account_id: str
    cash: int
    holdings: list[HoldingValuation] = field(default_factory=list)
    total_value: int = 0
    account_value: int = 0
    as_of: Optional[datetime] = None
