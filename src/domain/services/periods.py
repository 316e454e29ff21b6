"""Calendar month helpers for report windows and list filters."""

import calendar
import re
from datetime import date

from src.domain.errors import ValidationError

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
_MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_month(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` string.

    Args:
        value: Month string.

    Returns:
        tuple[int, int]: Year and month number.

    Raises:
        ValidationError: If the value is not a valid month.
    """
    match = _MONTH_PATTERN.match(value or "")
    if not match:
        raise ValidationError("Month must be in YYYY-MM format")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError("Month must be in YYYY-MM format")
    return year, month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_month(today: date) -> str:
    """Return the ``YYYY-MM`` month containing ``today``."""
    return format_month(today.year, today.month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last calendar day of a month, both inclusive."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return the month ``offset`` months away (negative goes back)."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def trailing_months(year: int, month: int, window: int) -> list[tuple[int, int]]:
    """Return ``window`` months ending at the given month, newest first."""
    return [shift_month(year, month, -offset) for offset in range(window)]


def month_label(year: int, month: int) -> str:
    """Return a short English label such as ``Jan 2024``."""
    return f"{_MONTH_LABELS[month - 1]} {year}"


def resolve_month(value: str | None, today: date) -> tuple[int, int]:
    """Parse ``value`` or fall back to the month containing ``today``."""
    if value is None:
        return today.year, today.month
    return parse_month(value)


__all__ = [
    "parse_month",
    "format_month",
    "current_month",
    "month_bounds",
    "shift_month",
    "trailing_months",
    "month_label",
    "resolve_month",
]
