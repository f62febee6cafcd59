"""Ledger mutations submitted together to the atomic commit."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AccountMutation:
    """New cash balance for an account, guarded by the version read at load time."""

    account_id: str
    expected_version: int
    cash: int


@dataclass(frozen=True)
class HoldingMutation:
    """
    Upsert-or-delete of one holding.

    ``expected_version`` of None means the holding did not exist at load time
    and must be inserted; ``quantity`` of 0 means the holding is deleted.
    """

    account_id: str
    symbol: str
    expected_version: Optional[int]
    quantity: int
    average_cost: int
    display_name: str = ""

    @property
    def is_insert(self) -> bool:
        return self.expected_version is None

    @property
    def is_delete(self) -> bool:
        return self.quantity == 0
