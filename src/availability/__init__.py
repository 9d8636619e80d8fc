from src.availability.aggregator import AvailabilityAggregator, compute_status
from src.availability.interval_resolver import (
    MalformedBookingError,
    resolve,
    resolve_end,
    resolve_interval,
)
from src.availability.refresher import AvailabilityBoard

__all__ = [
    "AvailabilityAggregator",
    "AvailabilityBoard",
    "MalformedBookingError",
    "compute_status",
    "resolve",
    "resolve_end",
    "resolve_interval",
]
