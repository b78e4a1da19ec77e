"""
Display formatting for costs and budget coverage.

The only place values are rounded.
"""

from .budget import is_indefinite

INFINITY_GLYPH = "∞"


def format_currency(amount: float) -> str:
    """Format a dollar amount to 2 decimals with thousands separators."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_months(months: float) -> str:
    """Format months covered to 1 decimal, or the infinity glyph."""
    if is_indefinite(months):
        return INFINITY_GLYPH
    return f"{months:,.1f}"
