"""
Resolve a reservation's civil date and times into absolute instants.

All instants are naive local datetimes; no timezone conversion happens.
An end time of midnight ("00:00") means the close of the booking's own
date, so it is read as the configured end-of-day time ("23:59").

Usage:
    interval = resolve_interval(booking)
    if interval.contains(now):
        ...
"""

import datetime as dt
from typing import Optional, Union

from src.config import settings
from src.schemas.reservation_schema import Booking, ResolvedInterval
from src.utils import normalize_time

CivilDate = Union[dt.date, str]


class MalformedBookingError(ValueError):
    """Raised when a booking's date or time cannot be composed into an instant."""


def _parse_date(day: CivilDate) -> dt.date:
    if isinstance(day, dt.datetime):
        return day.date()
    if isinstance(day, dt.date):
        return day
    try:
        return dt.date.fromisoformat(str(day).strip()[:10])
    except ValueError:
        raise MalformedBookingError(f"Unparseable date: {day!r}") from None


def _parse_time(value: str) -> dt.time:
    if not isinstance(value, str):
        raise MalformedBookingError(f"Unparseable time: {value!r}")
    try:
        return dt.datetime.strptime(normalize_time(value), "%H:%M").time()
    except ValueError:
        raise MalformedBookingError(f"Unparseable time: {value!r}") from None


def resolve(day: CivilDate, time: str) -> dt.datetime:
    """Compose a local instant from a civil date and an ``HH:MM`` time."""
    return dt.datetime.combine(_parse_date(day), _parse_time(time))


def resolve_end(
    day: CivilDate,
    end_time: str,
    *,
    midnight: Optional[str] = None,
    end_of_day: Optional[str] = None,
) -> dt.datetime:
    """Compose a booking's end instant, reading midnight as end of the same day."""
    midnight = midnight or settings.availability.midnight_end_time
    end_of_day = end_of_day or settings.availability.end_of_day_time
    if isinstance(end_time, str) and normalize_time(end_time) == midnight:
        end_time = end_of_day
    return resolve(day, end_time)


def resolve_interval(
    booking: Booking,
    *,
    midnight: Optional[str] = None,
    end_of_day: Optional[str] = None,
) -> ResolvedInterval:
    """Resolve both ends of a booking. Does not check that end > start."""
    return ResolvedInterval(
        start=resolve(booking.date, booking.start_time),
        end=resolve_end(
            booking.date, booking.end_time, midnight=midnight, end_of_day=end_of_day
        ),
    )
