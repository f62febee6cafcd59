"""Account service: first-login provisioning and the account summary."""

from papertrade.core.exceptions import (
    AccountNotFoundError,
    PriceUnavailableError,
    QuoteError,
    UnauthorizedError,
)
from papertrade.core.money import to_cents
from papertrade.domain.models import Account, Transaction
from papertrade.repositories.protocols import LedgerStore
from papertrade.services.quote_cache import QuoteCache


class AccountService:
    """Creates accounts on first login and reports cash, value and day change."""

    def __init__(
        self,
        ledger_store: LedgerStore,
        quote_cache: QuoteCache,
        starting_cash: int,
    ):
        self._store = ledger_store
        self._quotes = quote_cache
        self._starting_cash = starting_cash

    def login(self, account_id: str) -> Account:
        """Return the caller's account, creating it with the starting cash on first login."""
        if not (account_id or "").strip():
            raise UnauthorizedError()
        return self._store.create_account_if_absent(account_id, self._starting_cash)

    def get_account(self, account_id: str) -> Account:
        """
        Return the account with ``change`` set to today's unrealized delta.

        change = Σ (price − previous_close) × quantity, each price truncated to
        cents first. Fails with PriceUnavailable if any holding can't be quoted.
        """
        account = self._store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        change = 0
        for holding in self._store.list_holdings(account_id):
            try:
                quote = self._quotes.get_price(holding.symbol)
            except QuoteError as exc:
                raise PriceUnavailableError(holding.symbol, exc.message) from exc
            current = to_cents(quote.price) * holding.quantity
            yesterday = to_cents(quote.previous_close) * holding.quantity
            change += current - yesterday

        account.change = change
        return account

    def list_transactions(self, account_id: str) -> list[Transaction]:
        """Transaction history, newest first."""
        if self._store.get_account(account_id) is None:
            raise AccountNotFoundError(account_id)
        return self._store.list_transactions(account_id)
