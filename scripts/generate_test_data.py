#!/usr/bin/env python3
"""
Generate demo trading activity for one account.
Logs in, then places random buys and sells through the order engine using
the offline stub quote provider, and prints the resulting valuation.
"""

import random
import sys

from papertrade.config.settings import get_settings
from papertrade.config.logging_config import setup_logging
from papertrade.core.exceptions import OrderRejectedError
from papertrade.core.money import format_cents
from papertrade.providers import StubMarketDataProvider
from papertrade.repositories.sqlalchemy import SqlAlchemyLedgerStore, get_session, init_db
from papertrade.services import (
    AccountService,
    OrderExecutionEngine,
    PortfolioValuationService,
    QuoteCache,
)

SYMBOLS = ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "NVDA", "META"]


def generate_demo_data(account_id: str = "demo@example.com", orders: int = 50, seed: int = 7) -> None:
    """Place ``orders`` random market orders for ``account_id``."""
    # Printed summary only; order INFO logs off
    setup_logging("WARNING")
    init_db()
    settings = get_settings()
    rng = random.Random(seed)

    quote_cache = QuoteCache(provider=StubMarketDataProvider())
    session = get_session()
    try:
        store = SqlAlchemyLedgerStore(session)
        accounts = AccountService(store, quote_cache, settings.starting_cash_cents)
        engine = OrderExecutionEngine(store, quote_cache, settings.order_conflict_retries)

        account = accounts.login(account_id)
        print(f"Account {account.account_id}: cash {format_cents(account.cash)}")
        print("=" * 60)

        for _ in range(orders):
            symbol = rng.choice(SYMBOLS)
            quantity = rng.randint(1, 20)
            holding = store.get_holding(account_id, symbol)
            try:
                if holding and rng.random() < 0.4:
                    txn = engine.sell(account_id, symbol, min(quantity, holding.quantity))
                else:
                    txn = engine.buy(account_id, symbol, quantity)
            except OrderRejectedError as e:
                print(f"✗ {symbol}: {e.code} - {e.message}")
                continue
            print(f"✓ {txn.side.value:4} {txn.quantity:3} {txn.symbol:5} @ {format_cents(txn.price)}")

        view = PortfolioValuationService(store, quote_cache).value_portfolio(account_id)
        print("=" * 60)
        for h in view.holdings:
            print(f"{h.symbol:5} {h.quantity:5} value {format_cents(h.current_value):>12} "
                  f"unrealized {format_cents(h.unrealized_change):>10}")
        print(f"Cash {format_cents(view.cash)}  Account value {format_cents(view.account_value)}")
    finally:
        session.close()
        quote_cache.close()


if __name__ == "__main__":
    generate_demo_data(*sys.argv[1:2])
