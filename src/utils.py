"""Shared utilities used across the availability engine."""

from datetime import date
from typing import Union


def normalize_time(value: str) -> str:
    """Trim a civil time-of-day to its ``HH:MM`` prefix.

    The reservations table stores ``time`` columns, which come back from the
    data layer as ``HH:MM:SS``.

    Examples:
        >>> normalize_time("09:30:00")
        '09:30'
        >>> normalize_time(" 14:00 ")
        '14:00'
    """
    return value.strip()[:5]


def date_key(value: Union[date, str]) -> str:
    """Return the zero-padded ``YYYY-MM-DD`` form used for ordering."""
    if isinstance(value, date):
        return value.isoformat()
    return value.strip()[:10]
