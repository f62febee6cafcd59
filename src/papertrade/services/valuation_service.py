"""Portfolio valuation: holdings joined with fresh quotes."""

import logging

from papertrade.core.exceptions import (
    AccountNotFoundError,
    PriceUnavailableError,
    QuoteError,
)
from papertrade.core.money import to_cents
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import HoldingValuation, PortfolioView
from papertrade.repositories.protocols import LedgerStore
from papertrade.services.quote_cache import QuoteCache

logger = logging.getLogger(__name__)


class PortfolioValuationService:
    """
    Values an account's holdings at current prices.

    Advisory read path: not atomic with concurrent orders, and re-derived on
    every call. A single failed quote aborts the whole valuation rather than
    reporting a partial total.
    """

    def __init__(self, ledger_store: LedgerStore, quote_cache: QuoteCache):
        self._store = ledger_store
        self._quotes = quote_cache

    def value_portfolio(self, account_id: str) -> PortfolioView:
        """
        Value every holding and persist ``account.value = cash + total_value``.

        Per holding (cents):
            current_value = current_price × quantity
            unrealized_change = current_value − average_cost × quantity
            day_change = quote change per share
            day_change_percent = quote percent change in hundredths of a percent
        """
        account = self._store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        holdings = self._store.list_holdings(account_id)
        valuations: list[HoldingValuation] = []
        total_value = 0

        for holding in holdings:
            try:
                quote = self._quotes.get_price(holding.symbol)
            except QuoteError as exc:
                logger.warning("Valuation of %s aborted at %s: %s", account_id, holding.symbol, exc.message)
                raise PriceUnavailableError(holding.symbol, exc.message) from exc

            price = to_cents(quote.price)
            current_value = price * holding.quantity
            total_value += current_value
            valuations.append(
                HoldingValuation(
                    symbol=holding.symbol,
                    display_name=holding.display_name,
                    quantity=holding.quantity,
                    average_cost=holding.average_cost,
                    current_price=price,
                    current_value=current_value,
                    unrealized_change=current_value - holding.cost_basis,
                    day_change=to_cents(quote.change),
                    day_change_percent=to_cents(quote.change_percent),
                )
            )

        account_value = account.cash + total_value
        self._store.update_account_value(account_id, account_value)

        return PortfolioView(
            account_id=account_id,
            cash=account.cash,
            holdings=valuations,
            total_value=total_value,
            account_value=account_value,
            as_of=now_eastern(),
        )
