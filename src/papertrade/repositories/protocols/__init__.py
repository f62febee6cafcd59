"""Repository protocol definitions (interfaces)."""

from papertrade.repositories.protocols.ledger_store import LedgerStore

__all__ = [
    "LedgerStore",
]
