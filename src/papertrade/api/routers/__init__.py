"""API routers package."""

from papertrade.api.routers.accounts import router as accounts_router
from papertrade.api.routers.trading import router as trading_router
from papertrade.api.routers.portfolio import router as portfolio_router
from papertrade.api.routers.quotes import router as quotes_router

__all__ = [
    "accounts_router",
    "trading_router",
    "portfolio_router",
    "quotes_router",
]
