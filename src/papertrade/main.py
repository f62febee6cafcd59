"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from papertrade.config.settings import get_settings
from papertrade.config.logging_config import setup_logging
from papertrade.repositories.sqlalchemy.database import init_db
from papertrade.api.routers import (
    accounts_router,
    trading_router,
    portfolio_router,
    quotes_router,
)
from papertrade.core.exceptions import AppError
from papertrade.providers import create_provider
from papertrade.services import QuoteCache


def build_quote_cache() -> QuoteCache:
    """Construct the process-wide quote cache from settings."""
    settings = get_settings()
    return QuoteCache(
        provider=create_provider(settings.market_data_provider),
        quote_ttl_seconds=settings.quote_ttl_seconds,
        profile_ttl_seconds=settings.profile_ttl_seconds,
        fetch_timeout_seconds=settings.quote_fetch_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    app.state.quote_cache = build_quote_cache()
    yield
    # Shutdown
    app.state.quote_cache.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Paper trading ledger: market orders against cached quotes",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(trading_router)
app.include_router(portfolio_router)
app.include_router(quotes_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
