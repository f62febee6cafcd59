"""Market data providers module."""

from papertrade.providers.market_data_provider import MarketDataProvider
from papertrade.providers.stub_provider import StubMarketDataProvider
from papertrade.providers.yfinance_provider import YFinanceMarketDataProvider


def create_provider(name: str) -> MarketDataProvider:
    """Build the provider selected by ``settings.market_data_provider``."""
    if name == "yfinance":
        return YFinanceMarketDataProvider()
    if name == "stub":
        return StubMarketDataProvider()
    raise ValueError(f"Unknown market data provider: {name}")


__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YFinanceMarketDataProvider",
    "create_provider",
]
