"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from papertrade.config.settings import get_settings
from papertrade.core.exceptions import UnauthorizedError
from papertrade.repositories.sqlalchemy.database import get_db
from papertrade.repositories.sqlalchemy import SqlAlchemyLedgerStore
from papertrade.services import (
    AccountService,
    OrderExecutionEngine,
    PortfolioValuationService,
    QuoteCache,
)


def get_current_account_id(request: Request) -> str:
    """
    Verified account identity of the caller.

    Authentication happens upstream; the identity arrives as an opaque header
    value and is used as the account key as-is.
    """
    account_id = (request.headers.get(get_settings().account_header) or "").strip()
    if not account_id:
        raise UnauthorizedError()
    return account_id


def get_quote_cache(request: Request) -> QuoteCache:
    """Provide the process-wide QuoteCache built at startup."""
    return request.app.state.quote_cache


def get_ledger_store(db: Session = Depends(get_db)) -> SqlAlchemyLedgerStore:
    """Provide a LedgerStore bound to this request's session."""
    return SqlAlchemyLedgerStore(db)


def get_order_engine(
    ledger_store: SqlAlchemyLedgerStore = Depends(get_ledger_store),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> OrderExecutionEngine:
    """Provide OrderExecutionEngine instance."""
    return OrderExecutionEngine(
        ledger_store=ledger_store,
        quote_cache=quote_cache,
        conflict_retries=get_settings().order_conflict_retries,
    )


def get_valuation_service(
    ledger_store: SqlAlchemyLedgerStore = Depends(get_ledger_store),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> PortfolioValuationService:
    """Provide PortfolioValuationService instance."""
    return PortfolioValuationService(
        ledger_store=ledger_store,
        quote_cache=quote_cache,
    )


def get_account_service(
    ledger_store: SqlAlchemyLedgerStore = Depends(get_ledger_store),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(
        ledger_store=ledger_store,
        quote_cache=quote_cache,
        starting_cash=get_settings().starting_cash_cents,
    )
