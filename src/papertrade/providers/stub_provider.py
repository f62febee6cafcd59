"""Stub market data provider for offline/testing use."""

import random

from papertrade.core.exceptions import InvalidSymbolError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import Quote, Profile


# Deterministic fake prices for common symbols: (price, previous close, name, sector)
_STUB_SYMBOLS: dict[str, tuple[float, float, str, str]] = {
    "AAPL": (185.50, 184.25, "Apple Inc.", "Technology"),
    "GOOGL": (142.75, 141.50, "Alphabet Inc.", "Communication Services"),
    "MSFT": (378.25, 376.80, "Microsoft Corporation", "Technology"),
    "AMZN": (178.50, 177.25, "Amazon.com, Inc.", "Consumer Cyclical"),
    "TSLA": (248.75, 250.10, "Tesla, Inc.", "Consumer Cyclical"),
    "NVDA": (485.25, 482.50, "NVIDIA Corporation", "Technology"),
    "META": (505.50, 502.75, "Meta Platforms, Inc.", "Communication Services"),
    "SPY": (485.25, 484.10, "SPDR S&P 500 ETF Trust", "Financial Services"),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for other alphabetic symbols and rejects anything else.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def get_quote(self, symbol: str) -> Quote:
        """Return a stub quote for the symbol."""
        price, prev_close = self._prices(symbol)
        change = round(price - prev_close, 2)
        return Quote(
            symbol=symbol,
            price=price,
            previous_close=prev_close,
            change=change,
            change_percent=round(change / prev_close * 100, 4),
            as_of=now_eastern(),
        )

    def get_profile(self, symbol: str) -> Profile:
        """Return a stub profile for the symbol."""
        if symbol in _STUB_SYMBOLS:
            _, _, name, sector = _STUB_SYMBOLS[symbol]
            return Profile(symbol=symbol, display_name=name, sector=sector)
        self._prices(symbol)
        return Profile(symbol=symbol, display_name=symbol)

    def _prices(self, symbol: str) -> tuple[float, float]:
        if symbol in _STUB_SYMBOLS:
            price, prev_close, _, _ = _STUB_SYMBOLS[symbol]
            return price, prev_close
        if not symbol.isalpha():
            raise InvalidSymbolError(symbol)
        # Same symbol always yields the same price
        rng = random.Random(f"{self._seed}:{symbol}")
        price = round(50 + rng.random() * 200, 2)
        change_pct = (rng.random() - 0.5) * 0.04
        prev_close = round(price / (1 + change_pct), 2)
        return price, prev_close
