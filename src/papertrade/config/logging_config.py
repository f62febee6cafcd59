"""Logging configuration."""

import logging
import sys
from typing import Optional

from papertrade.config.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once per process; ``level`` overrides settings.log_level."""
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # SQL echo and the market data client's HTTP chatter stay at WARNING
    for noisy in ("sqlalchemy.engine", "yfinance", "peewee", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
