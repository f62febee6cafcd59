"""Application-level exceptions."""

from enum import Enum


class RejectionReason(str, Enum):
    """Terminal reasons an order or portfolio request can be refused."""

    UNAUTHORIZED = "UNAUTHORIZED"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PRICE_UNAVAILABLE = "PRICE_UNAVAILABLE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_SHARES = "INSUFFICIENT_SHARES"
    CONFLICT = "CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


# Quote layer


class QuoteError(AppError):
    """Raised by the quote cache when no usable quote or profile can be produced."""

    status_code = 502


class UpstreamUnavailableError(QuoteError):
    """Raised when the upstream market data provider fails or times out."""

    def __init__(self, symbol: str, detail: str = "upstream unavailable"):
        self.symbol = symbol
        super().__init__(f"Market data for {symbol} unavailable: {detail}", code="UPSTREAM_UNAVAILABLE")


class InvalidSymbolError(QuoteError):
    """Raised when the provider does not know the symbol or returns an unusable price."""

    status_code = 400

    def __init__(self, symbol: str, detail: str = "unknown symbol"):
        self.symbol = symbol
        super().__init__(f"Invalid symbol {symbol!r}: {detail}", code="INVALID_SYMBOL")


# Ledger store layer


class ConflictError(AppError):
    """Raised by the ledger store when a compare-and-swap commit loses a race."""

    status_code = 409

    def __init__(self, account_id: str, detail: str = "concurrent modification"):
        self.account_id = account_id
        super().__init__(f"Conflict on account {account_id}: {detail}", code="CONFLICT")


class StoreUnavailableError(AppError):
    """Raised when the persistence layer is unreachable or a write fails."""

    status_code = 503

    def __init__(self, detail: str):
        super().__init__(f"Ledger store unavailable: {detail}", code="STORE_UNAVAILABLE")


# Order rejections


class OrderRejectedError(AppError):
    """
    Terminal rejection of an order or portfolio request.

    Raised only after the ledger has been left untouched; ``reason`` carries
    the machine-readable cause.
    """

    reason: RejectionReason = RejectionReason.CONFLICT

    def __init__(self, message: str):
        super().__init__(message, code=self.reason.value)


class UnauthorizedError(OrderRejectedError):
    """Raised when the caller carries no verified account identity."""

    reason = RejectionReason.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message)


class AccountNotFoundError(OrderRejectedError):
    """Raised when the account for a verified identity does not exist."""

    reason = RejectionReason.ACCOUNT_NOT_FOUND
    status_code = 404

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


class PriceUnavailableError(OrderRejectedError):
    """Raised when a price lookup failed or returned an invalid price."""

    reason = RejectionReason.PRICE_UNAVAILABLE
    status_code = 502

    def __init__(self, symbol: str, detail: str):
        self.symbol = symbol
        super().__init__(f"Error fetching stock price for {symbol}: {detail}")


class InsufficientFundsError(OrderRejectedError):
    """Raised when a buy costs more than the available cash."""

    reason = RejectionReason.INSUFFICIENT_FUNDS

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient funds: requested {requested}, available {available}")


class InsufficientSharesError(OrderRejectedError):
    """Raised when attempting to sell more shares than owned."""

    reason = RejectionReason.INSUFFICIENT_SHARES

    def __init__(self, symbol: str, requested: int, available: int):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}"
        )


class OrderConflictError(OrderRejectedError):
    """Raised when an order keeps losing races on its account after retrying."""

    reason = RejectionReason.CONFLICT
    status_code = 409

    def __init__(self, account_id: str, attempts: int):
        self.account_id = account_id
        self.attempts = attempts
        super().__init__(f"Order on account {account_id} conflicted {attempts} time(s)")


class OrderStoreUnavailableError(OrderRejectedError):
    """Raised when the ledger store could not commit an order."""

    reason = RejectionReason.STORE_UNAVAILABLE
    status_code = 503

    def __init__(self, detail: str):
        super().__init__(f"Order not committed: {detail}")
