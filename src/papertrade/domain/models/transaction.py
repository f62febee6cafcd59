"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime

from papertrade.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Transaction:
    """
    Immutable record of one executed order (append-only audit log).

    ``price`` is the fill price in cents per share.
    """

    transaction_id: str
    account_id: str
    symbol: str
    side: OrderSide
    quantity: int
    price: int
    timestamp: datetime

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))

    @property
    def gross_amount(self) -> int:
        """Cash moved by the fill, in cents (always positive)."""
        return self.quantity * self.price

    @property
    def net_cash_impact(self) -> int:
        """
        Signed cash impact of this transaction.

        Positive = cash added, Negative = cash removed.
        """
        if self.side == OrderSide.BUY:
            return -self.gross_amount
        return self.gross_amount
