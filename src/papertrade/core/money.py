"""Conversion of upstream prices to integer minor units."""

from typing import Union


def to_cents(value: Union[float, int]) -> int:
    """
    Convert a source-unit amount to integer cents.

    Multiplies by 100 and truncates toward zero. Every read path that turns a
    quote into money goes through here so order fills and valuations agree.
    """
    return int(value * 100)


def format_cents(cents: int) -> str:
    """Render cents as a dollar string, e.g. 123456 -> '1234.56'."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    return f"{sign}{whole}.{frac:02d}"
