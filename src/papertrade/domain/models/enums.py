"""Enumerations for domain models."""

from enum import Enum


class OrderSide(str, Enum):
    """Side of an executed market order."""

    BUY = "BUY"
    SELL = "SELL"
