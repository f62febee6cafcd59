"""View models for service outputs."""

from papertrade.domain.views.portfolio import (
    Quote,
    Profile,
    HoldingValuation,
    PortfolioView,
)

__all__ = [
    "Quote",
    "Profile",
    "HoldingValuation",
    "PortfolioView",
]
