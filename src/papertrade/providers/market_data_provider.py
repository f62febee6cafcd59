"""Market data provider protocol."""

from typing import Protocol

from papertrade.domain.views import Quote, Profile


class MarketDataProvider(Protocol):
    """
    Protocol for upstream market data providers.

    Implementations perform one blocking lookup per call and do no caching.
    Transient failures may surface as any exception; an unknown symbol should
    raise ``InvalidSymbolError``.
    """

    def get_quote(self, symbol: str) -> Quote:
        """Fetch the current price, previous close and day change for a symbol."""
        ...

    def get_profile(self, symbol: str) -> Profile:
        """Fetch display name, logo and sector for a symbol."""
        ...
