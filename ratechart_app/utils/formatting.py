"""
Display formatting for axis labels, tooltips and change summaries.

Numbers use comma digit grouping with trailing fractional zeros trimmed,
matching how the app renders won amounts ("1,350.25", "1,300").
"""

import math
import re
from typing import Optional

_CANONICAL_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def format_grouped(value: float, fraction_digits: int = 2) -> str:
    """
    Format a number with grouping separators and at most ``fraction_digits`` decimals.

    Args:
        value: Number to format
        fraction_digits: Maximum number of decimals kept

    Returns:
        Grouped string, e.g. ``1,350.25`` or ``-1,300``
    """
    if not math.isfinite(value):
        return "-"

    text = f"{value:,.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_month_day(date_str: str) -> str:
    """
    Short ``M/D`` label for a canonical date.

    Non-canonical dates (kept in lenient mode) are returned unchanged.
    """
    match = _CANONICAL_DATE.match(date_str)
    if not match:
        return date_str
    _, month, day = match.groups()
    return f"{int(month)}/{int(day)}"


def format_signed_amount(value: float, unit: str = "", fraction_digits: int = 2) -> str:
    """Signed grouped amount with unit, e.g. ``+3.5원`` or ``-1,200원``."""
    sign = "+" if value > 0 else "-" if value < 0 else ""
    return f"{sign}{format_grouped(abs(value), fraction_digits)}{unit}"


def format_signed_percent(value: Optional[float], fraction_digits: int = 2) -> str:
    """Signed percentage with trailing zeros trimmed, ``-`` when unknown."""
    if value is None or not math.isfinite(value):
        return "-"
    sign = "+" if value > 0 else "-" if value < 0 else ""
    formatted = f"{abs(value):.{fraction_digits}f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return f"{sign}{formatted}%"
