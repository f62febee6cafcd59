"""Repository layer - data access abstractions and implementations."""

from papertrade.repositories.protocols import LedgerStore

__all__ = [
    "LedgerStore",
]
