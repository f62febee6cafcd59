"""
Yahoo Finance market data provider via yfinance.

One ``Ticker.info`` lookup per call; caching and timeouts are the quote
cache's job.
"""

import logging
from typing import Any, Optional

from papertrade.core.exceptions import InvalidSymbolError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import Quote, Profile

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _first_float(info: dict[str, Any], *keys: str) -> Optional[float]:
    """Return the first key of ``info`` that holds a number, as float."""
    for key in keys:
        value = info.get(key)
        if value is None:
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None


class YFinanceMarketDataProvider:
    """Fetches quotes and profiles from Yahoo Finance."""

    def _info(self, symbol: str) -> dict[str, Any]:
        yf = _get_yf()
        info = yf.Ticker(symbol).info
        if not isinstance(info, dict) or not info:
            raise InvalidSymbolError(symbol)
        return info

    def get_quote(self, symbol: str) -> Quote:
        """
        Return price, previous close and day change for a symbol.

        Price: currentPrice preferred, then regularMarketPrice.
        Previous close: previousClose, then regularMarketPreviousClose.
        """
        info = self._info(symbol)
        price = _first_float(info, "currentPrice", "regularMarketPrice")
        if price is None:
            raise InvalidSymbolError(symbol, "no price reported")
        prev_close = _first_float(info, "previousClose", "regularMarketPreviousClose")
        if prev_close is None:
            logger.debug("No previous close for %s; assuming flat day", symbol)
            prev_close = price
        change = price - prev_close
        change_percent = (change / prev_close * 100) if prev_close else 0.0
        return Quote(
            symbol=symbol,
            price=price,
            previous_close=prev_close,
            change=change,
            change_percent=change_percent,
            as_of=now_eastern(),
        )

    def get_profile(self, symbol: str) -> Profile:
        """Return display name (longName, then shortName), logo and sector."""
        info = self._info(symbol)
        name = (info.get("longName") or info.get("shortName") or "").strip() or symbol
        return Profile(
            symbol=symbol,
            display_name=name,
            logo=info.get("logo_url") or None,
            sector=info.get("sector") or None,
        )
