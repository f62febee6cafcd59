"""
Pytest configuration and fixtures for the paper trading ledger tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and counting market data providers
- A manual clock for quote cache TTL tests
- Fault-injecting ledger store wrappers (conflicts, mid-commit failures)
- Service and API client fixtures
"""

import itertools
from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from papertrade.main import app
from papertrade.api.deps import get_quote_cache
from papertrade.config.settings import Settings, set_settings, reset_settings
from papertrade.core.exceptions import (
    ConflictError,
    InvalidSymbolError,
    StoreUnavailableError,
)
from papertrade.core.timezone import EASTERN_TZ
from papertrade.domain.models import (
    Account,
    AccountMutation,
    HoldingMutation,
    Transaction,
)
from papertrade.domain.views import Quote, Profile
from papertrade.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from papertrade.repositories.sqlalchemy import orm_models  # noqa: F401
from papertrade.repositories.sqlalchemy import SqlAlchemyLedgerStore
from papertrade.services import (
    AccountService,
    OrderExecutionEngine,
    PortfolioValuationService,
    QuoteCache,
)


STARTING_CASH = 100_000  # $1,000.00, matches the worked example


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def ticking_clock(fixed_now) -> Callable[[], datetime]:
    """Clock returning fixed_now, fixed_now + 1s, ... so transaction order is strict."""
    counter = itertools.count()
    return lambda: fixed_now + timedelta(seconds=next(counter))


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Provides fixed quotes that tests can change, and counts upstream calls.
    """

    FIXED_QUOTES = {
        "AAPL": (185.50, 184.25),  # +1.25 / +0.68%
        "MSFT": (378.25, 376.80),  # +1.45 / +0.38%
        "TSLA": (248.75, 250.10),  # -1.35 / -0.54% (down)
        "ACME": (50.00, 49.00),
    }

    NAMES = {
        "AAPL": "Apple Inc.",
        "MSFT": "Microsoft Corporation",
        "TSLA": "Tesla, Inc.",
        "ACME": "Acme Corporation",
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or eastern_datetime(2024, 6, 15, 16, 0, 0)
        self._quotes = dict(self.FIXED_QUOTES)
        self.quote_calls: dict[str, int] = {}
        self.profile_calls: dict[str, int] = {}

    def set_price(self, symbol: str, price: float, previous_close: Optional[float] = None) -> None:
        _, old_prev = self._quotes.get(symbol, (price, price))
        self._quotes[symbol] = (price, previous_close if previous_close is not None else old_prev)

    def get_quote(self, symbol: str) -> Quote:
        self.quote_calls[symbol] = self.quote_calls.get(symbol, 0) + 1
        if symbol not in self._quotes:
            raise InvalidSymbolError(symbol)
        price, prev_close = self._quotes[symbol]
        change = price - prev_close
        return Quote(
            symbol=symbol,
            price=price,
            previous_close=prev_close,
            change=change,
            change_percent=change / prev_close * 100 if prev_close else 0.0,
            as_of=self._as_of,
        )

    def get_profile(self, symbol: str) -> Profile:
        self.profile_calls[symbol] = self.profile_calls.get(symbol, 0) + 1
        if symbol not in self._quotes:
            raise InvalidSymbolError(symbol)
        return Profile(symbol=symbol, display_name=self.NAMES.get(symbol, symbol))


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def __init__(self):
        self.calls = 0

    def get_quote(self, symbol: str) -> Quote:
        self.calls += 1
        raise ConnectionError("Network unavailable")

    def get_profile(self, symbol: str) -> Profile:
        self.calls += 1
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def quote_cache(deterministic_provider, manual_clock):
    """QuoteCache with default TTLs over the deterministic provider and a manual clock."""
    cache = QuoteCache(
        provider=deterministic_provider,
        clock=manual_clock,
        fetch_timeout_seconds=5,
    )
    yield cache
    cache.close()


@pytest.fixture
def live_quote_cache(deterministic_provider):
    """QuoteCache that never serves cached quotes, so set_price takes effect immediately."""
    cache = QuoteCache(
        provider=deterministic_provider,
        quote_ttl_seconds=0,
        fetch_timeout_seconds=5,
    )
    yield cache
    cache.close()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(test_session_factory) -> Session:
    """Create test database session."""
    session = test_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ledger_store(test_session) -> SqlAlchemyLedgerStore:
    """Provide test LedgerStore."""
    return SqlAlchemyLedgerStore(test_session)


# =============================================================================
# FAULT-INJECTING STORES
# =============================================================================


class InterceptingLedgerStore:
    """
    LedgerStore wrapper that can interfere with ``apply_order_atomically``.

    - ``conflicts``: number of upcoming commits that raise ConflictError
    - ``fail_commits``: upcoming commits raise StoreUnavailableError
    - ``before_commit``: callable run once just before the next commit
      (used to slip a competing order in between load and commit)
    """

    def __init__(self, inner):
        self._inner = inner
        self.conflicts = 0
        self.fail_commits = False
        self.before_commit: Optional[Callable[[], None]] = None
        self.commit_attempts = 0

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def apply_order_atomically(
        self,
        account_mutation: AccountMutation,
        holding_mutation: HoldingMutation,
        transaction: Transaction,
    ) -> Transaction:
        self.commit_attempts += 1
        if self.before_commit is not None:
            hook, self.before_commit = self.before_commit, None
            hook()
        if self.conflicts > 0:
            self.conflicts -= 1
            raise ConflictError(account_mutation.account_id, "injected")
        if self.fail_commits:
            raise StoreUnavailableError("injected outage")
        return self._inner.apply_order_atomically(account_mutation, holding_mutation, transaction)


@pytest.fixture
def intercepting_store(ledger_store) -> InterceptingLedgerStore:
    return InterceptingLedgerStore(ledger_store)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def order_engine(ledger_store, live_quote_cache, ticking_clock) -> OrderExecutionEngine:
    """Provide test OrderExecutionEngine."""
    return OrderExecutionEngine(
        ledger_store=ledger_store,
        quote_cache=live_quote_cache,
        clock=ticking_clock,
    )


@pytest.fixture
def valuation_service(ledger_store, live_quote_cache) -> PortfolioValuationService:
    """Provide test PortfolioValuationService."""
    return PortfolioValuationService(
        ledger_store=ledger_store,
        quote_cache=live_quote_cache,
    )


@pytest.fixture
def account_service(ledger_store, live_quote_cache) -> AccountService:
    """Provide test AccountService."""
    return AccountService(
        ledger_store=ledger_store,
        quote_cache=live_quote_cache,
        starting_cash=STARTING_CASH,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(ledger_store) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(account_id: str = "trader@example.com", cash: int = STARTING_CASH) -> Account:
        return ledger_store.create_account_if_absent(account_id, cash)

    return _create_account


@pytest.fixture
def sample_account(account_factory) -> Account:
    """Create a sample account with the starting cash."""
    return account_factory()


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_quote_cache(deterministic_provider):
    cache = QuoteCache(provider=deterministic_provider, quote_ttl_seconds=0)
    yield cache
    cache.close()


@pytest.fixture
def client(test_session_factory, api_quote_cache) -> TestClient:
    """Provide FastAPI test client with test database and deterministic quotes."""
    set_settings(Settings(database_url="sqlite://", starting_cash_cents=STARTING_CASH))
    reset_database()

    def override_get_db():
        session = test_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_quote_cache] = lambda: api_quote_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Account-Id": "trader@example.com"}
