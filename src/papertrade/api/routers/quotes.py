"""Market data passthrough endpoints (served from the quote cache)."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_quote_cache
from papertrade.api.schemas import ProfileResponse, QuoteResponse
from papertrade.services import QuoteCache

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("/{symbol}", response_model=QuoteResponse)
def get_quote(symbol: str, quote_cache: QuoteCache = Depends(get_quote_cache)) -> QuoteResponse:
    """Get the current quote for a symbol."""
    return QuoteResponse.model_validate(quote_cache.get_price(symbol))


@router.get("/{symbol}/profile", response_model=ProfileResponse)
def get_profile(symbol: str, quote_cache: QuoteCache = Depends(get_quote_cache)) -> ProfileResponse:
    """Get display name, logo and sector for a symbol."""
    return ProfileResponse.model_validate(quote_cache.get_profile(symbol))
