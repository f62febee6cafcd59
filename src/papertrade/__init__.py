"""Paper trading ledger: market orders against cached upstream quotes."""

__version__ = "0.1.0"
