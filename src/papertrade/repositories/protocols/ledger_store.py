"""Ledger store protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import (
    Account,
    AccountMutation,
    Holding,
    HoldingMutation,
    Transaction,
)


class LedgerStore(Protocol):
    """
    Interface for durable account, holding and transaction data.

    The store is the only component allowed to mutate accounts and holdings.
    Order effects go exclusively through ``apply_order_atomically``.
    """

    def get_account(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def create_account_if_absent(self, account_id: str, starting_cash: int) -> Account:
        """Create the account with the starting cash unless it exists; return the stored account."""
        ...

    def get_holding(self, account_id: str, symbol: str) -> Optional[Holding]:
        """Retrieve one holding."""
        ...

    def list_holdings(self, account_id: str) -> list[Holding]:
        """List every holding of an account."""
        ...

    def list_transactions(self, account_id: str) -> list[Transaction]:
        """List an account's transactions, newest first."""
        ...

    def apply_order_atomically(
        self,
        account_mutation: AccountMutation,
        holding_mutation: HoldingMutation,
        transaction: Transaction,
    ) -> Transaction:
        """
        Apply cash update, holding upsert-or-delete and transaction insert as one unit.

        Raises ConflictError when the account or holding changed since it was
        read, StoreUnavailableError when the write fails. Nothing is applied
        in either case.
        """
        ...

    def update_account_value(self, account_id: str, value: int) -> None:
        """Persist the latest valuation of an account."""
        ...
