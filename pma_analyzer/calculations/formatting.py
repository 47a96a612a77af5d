"""
Display formatting for engine outputs.

Non-finite values render as a placeholder so "nan"/"inf" never reach a
report or the page.
"""

import math
from typing import Optional

PLACEHOLDER = "—"
NO_PAYBACK = "No payback"


def _is_displayable(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def format_currency(value: Optional[float]) -> str:
    """Format as US dollars with grouping and 2 decimals, e.g. $1,234.50."""
    if not _is_displayable(value):
        return PLACEHOLDER
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Optional[float]) -> str:
    """Format a decimal rate as a percentage, e.g. 0.1234 -> 12.34%."""
    if not _is_displayable(value):
        return PLACEHOLDER
    return f"{value * 100:.2f}%"


def format_years(value: Optional[float]) -> str:
    """Format a payback period, e.g. 3.42 years."""
    if value is not None and value == math.inf:
        return NO_PAYBACK
    if not _is_displayable(value):
        return PLACEHOLDER
    return f"{value:.2f} years"
