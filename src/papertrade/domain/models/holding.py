"""Holding domain model."""

from dataclasses import dataclass


@dataclass
class Holding:
    """
    An account's position in one symbol.

    ``quantity`` is always > 0 for a stored holding; the row is removed
    instead of being left at zero. ``average_cost`` is the floor-divided
    weighted average of all buy fills, in cents per share.
    """

    account_id: str
    symbol: str
    quantity: int
    average_cost: int
    display_name: str = ""
    version: int = 0

    @property
    def cost_basis(self) -> int:
        """Total cost of the position in cents."""
        return self.quantity * self.average_cost
