"""Domain models package."""

from papertrade.domain.models.enums import OrderSide
from papertrade.domain.models.account import Account
from papertrade.domain.models.holding import Holding
from papertrade.domain.models.transaction import Transaction
from papertrade.domain.models.mutations import AccountMutation, HoldingMutation

__all__ = [
    "OrderSide",
    "Account",
    "Holding",
    "Transaction",
    "AccountMutation",
    "HoldingMutation",
]
