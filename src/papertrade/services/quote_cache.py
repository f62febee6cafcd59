"""Quote cache: time-bounded quotes and profiles in front of the market data provider."""

import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Callable, Optional, TypeVar

from papertrade.core.exceptions import (
    InvalidSymbolError,
    QuoteError,
    UpstreamUnavailableError,
)
from papertrade.domain.views import Quote, Profile
from papertrade.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_TTL_SECONDS = 5 * 60
DEFAULT_PROFILE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_FETCH_TIMEOUT_SECONDS = 10

T = TypeVar("T", Quote, Profile)


def normalize_symbol(symbol: Optional[str]) -> str:
    """Strip and uppercase a symbol; None becomes an empty string."""
    return (symbol or "").strip().upper()


def _is_usable(quote: Quote) -> bool:
    """A positive finite price, and finite close and change figures."""
    figures = (quote.price, quote.previous_close, quote.change, quote.change_percent)
    if any(f is None or not math.isfinite(f) for f in figures):
        return False
    return quote.price > 0


class QuoteCache:
    """
    Caches provider quotes and profiles per symbol with separate TTLs.

    One instance is shared by every request in the process. The backing maps
    are guarded by a lock; upstream fetches run outside it, so concurrent
    misses on the same symbol may each call the provider and the last write
    wins. Failed or invalid fetches are never cached, and a failed refresh
    never falls back to the expired entry.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        quote_ttl_seconds: float = DEFAULT_QUOTE_TTL_SECONDS,
        profile_ttl_seconds: float = DEFAULT_PROFILE_TTL_SECONDS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_workers: int = 8,
    ):
        self._provider = provider
        self._quote_ttl = quote_ttl_seconds
        self._profile_ttl = profile_ttl_seconds
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # symbol -> (value, fetched_at)
        self._quotes: dict[str, tuple[Quote, float]] = {}
        self._profiles: dict[str, tuple[Profile, float]] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="quote-fetch",
        )

    def get_price(self, symbol: str) -> Quote:
        """
        Return the quote for a symbol, from cache when younger than the quote TTL.

        Raises InvalidSymbolError for unknown symbols or unusable prices
        (missing, non-positive, NaN or infinite) and UpstreamUnavailableError
        when the provider fails or times out.
        """
        key = self._require_symbol(symbol)
        cached = self._lookup(self._quotes, key, self._quote_ttl)
        if cached is not None:
            return cached

        quote = self._fetch(key, self._provider.get_quote)
        if not _is_usable(quote):
            logger.warning("Rejecting invalid quote for %s: %r", key, quote)
            raise InvalidSymbolError(key, "invalid stock price returned")

        self._store(self._quotes, key, quote)
        return quote

    def get_profile(self, symbol: str) -> Profile:
        """Return the profile for a symbol, from cache when younger than the profile TTL."""
        key = self._require_symbol(symbol)
        cached = self._lookup(self._profiles, key, self._profile_ttl)
        if cached is not None:
            return cached

        profile = self._fetch(key, self._provider.get_profile)
        self._store(self._profiles, key, profile)
        return profile

    def clear(self) -> None:
        """Drop every cached quote and profile."""
        with self._lock:
            self._quotes.clear()
            self._profiles.clear()

    def close(self) -> None:
        """Release the fetch worker pool; the cache must not be used afterwards."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _require_symbol(symbol: str) -> str:
        key = normalize_symbol(symbol)
        if not key:
            raise InvalidSymbolError(symbol or "", "symbol is required")
        return key

    def _lookup(
        self,
        entries: dict[str, tuple[T, float]],
        key: str,
        ttl: float,
    ) -> Optional[T]:
        with self._lock:
            entry = entries.get(key)
        if entry is None:
            return None
        value, fetched_at = entry
        if self._clock() - fetched_at < ttl:
            return value
        return None

    def _store(self, entries: dict[str, tuple[T, float]], key: str, value: T) -> None:
        with self._lock:
            entries[key] = (value, self._clock())

    def _fetch(self, key: str, fetch: Callable[[str], T]) -> T:
        """Call the provider with a timeout, translating failures into QuoteError."""
        try:
            future = self._executor.submit(fetch, key)
            return future.result(timeout=self._fetch_timeout)
        except QuoteError:
            raise
        except FuturesTimeoutError:
            logger.warning("Market data fetch for %s timed out after %ss", key, self._fetch_timeout)
            raise UpstreamUnavailableError(key, "timed out")
        except Exception as exc:
            logger.warning("Market data fetch for %s failed: %s", key, exc)
            raise UpstreamUnavailableError(key, str(exc)) from exc
