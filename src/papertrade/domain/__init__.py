"""Domain layer - pure business models with no external dependencies."""

from papertrade.domain.models import (
    OrderSide,
    Account,
    Holding,
    Transaction,
    AccountMutation,
    HoldingMutation,
)

__all__ = [
    "OrderSide",
    "Account",
    "Holding",
    "Transaction",
    "AccountMutation",
    "HoldingMutation",
]
