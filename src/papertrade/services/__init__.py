"""Service layer - business logic orchestration."""

from papertrade.services.quote_cache import QuoteCache
from papertrade.services.order_engine import OrderExecutionEngine, OrderRequest
from papertrade.services.valuation_service import PortfolioValuationService
from papertrade.services.account_service import AccountService

__all__ = [
    "QuoteCache",
    "OrderExecutionEngine",
    "OrderRequest",
    "PortfolioValuationService",
    "AccountService",
]
