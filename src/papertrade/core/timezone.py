"""Timezone utilities for US/Eastern market time."""

from datetime import datetime

import pytz

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def to_naive_utc(dt: datetime) -> datetime:
    """
    Storage form of a timestamp: naive UTC.

    Eastern wall time repeats an hour each November, so it can't be the
    stored or sorted value.
    """
    return to_eastern(dt).astimezone(pytz.utc).replace(tzinfo=None)


def from_naive_utc(dt: datetime) -> datetime:
    """Read a stored naive-UTC timestamp back as US/Eastern."""
    return pytz.utc.localize(dt).astimezone(EASTERN_TZ)
