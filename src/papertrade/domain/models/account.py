"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Account:
    """
    Trading account keyed by the caller's verified identity.

    All money is integer cents. ``value`` is cash plus the market value of
    holdings as of the last valuation; ``change`` is derived on read and
    never persisted. ``version`` is bumped by every committed order.
    """

    account_id: str
    cash: int
    value: int = 0
    change: int = 0
    version: int = 0
    created_at_est: Optional[datetime] = field(default=None)
