"""SQLAlchemy repository implementations."""

from papertrade.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from papertrade.repositories.sqlalchemy.ledger_store import SqlAlchemyLedgerStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyLedgerStore",
]
