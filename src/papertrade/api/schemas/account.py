"""Pydantic schemas for account endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AccountResponse(BaseModel):
    """Response schema for the caller's account (money in cents)."""

    model_config = {"from_attributes": True}

    account_id: str
    cash: int
    value: int
    change: int = 0
    created_at_est: Optional[datetime] = None
