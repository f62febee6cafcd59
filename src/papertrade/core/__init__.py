"""Core utilities and shared functionality."""

from papertrade.core.timezone import (
    now_eastern,
    to_eastern,
    EASTERN_TZ,
)
from papertrade.core.money import to_cents, format_cents
from papertrade.core.exceptions import (
    RejectionReason,
    AppError,
    ValidationError,
    QuoteError,
    UpstreamUnavailableError,
    InvalidSymbolError,
    ConflictError,
    StoreUnavailableError,
    OrderRejectedError,
    UnauthorizedError,
    AccountNotFoundError,
    PriceUnavailableError,
    InsufficientFundsError,
    InsufficientSharesError,
    OrderConflictError,
    OrderStoreUnavailableError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "EASTERN_TZ",
    "to_cents",
    "format_cents",
    "RejectionReason",
    "AppError",
    "ValidationError",
    "QuoteError",
    "UpstreamUnavailableError",
    "InvalidSymbolError",
    "ConflictError",
    "StoreUnavailableError",
    "OrderRejectedError",
    "UnauthorizedError",
    "AccountNotFoundError",
    "PriceUnavailableError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "OrderConflictError",
    "OrderStoreUnavailableError",
]
