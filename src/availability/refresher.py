"""
Caller-side refresh loop around the pure availability computation.

The board awaits the data-access collaborators, reads the clock once,
and hands everything to the aggregator. It supports pull mode (``poll``
on an interval) and push mode (``on_update`` subscribers notified after
every refresh); the aggregator itself knows about neither.
"""

import asyncio
import datetime as dt
from typing import Awaitable, Callable, Optional

from src.availability.aggregator import AvailabilityAggregator
from src.config import settings
from src.logging_context import get_refresh_logger, new_refresh_id
from src.schemas.equipment_schema import EquipmentItem
from src.schemas.reservation_schema import Booking, EquipmentStatusView
from src.tools.snapshot import Snapshot

logger = get_refresh_logger(__name__)

EquipmentFetcher = Callable[[], Awaitable[list[EquipmentItem]]]
BookingFetcher = Callable[[], Awaitable[list[Booking]]]
SnapshotFetcher = Callable[[], Awaitable[Snapshot]]
Views = dict[str, EquipmentStatusView]


class AvailabilityBoard:
    """Holds the latest computed views for a dashboard.

    Data comes either from two independent fetchers (equipment and
    bookings, awaited concurrently) or from one ``fetch_snapshot`` that
    returns both lists from a single read.
    """

    def __init__(
        self,
        fetch_equipment: Optional[EquipmentFetcher] = None,
        fetch_bookings: Optional[BookingFetcher] = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
        aggregator: Optional[AvailabilityAggregator] = None,
        *,
        fetch_snapshot: Optional[SnapshotFetcher] = None,
    ) -> None:
        if fetch_snapshot is None and (fetch_equipment is None or fetch_bookings is None):
            raise ValueError(
                "AvailabilityBoard needs fetch_equipment and fetch_bookings, or fetch_snapshot"
            )
        self._fetch_equipment = fetch_equipment
        self._fetch_bookings = fetch_bookings
        self._fetch_snapshot = fetch_snapshot
        self._clock = clock
        self._aggregator = aggregator or AvailabilityAggregator()
        self._views: Views = {}
        self._last_refreshed_at: Optional[dt.datetime] = None
        self._subscribers: list[Callable[[Views], None]] = []
        self.refresh_count = 0

    @property
    def views(self) -> Views:
        return self._views

    @property
    def last_refreshed_at(self) -> Optional[dt.datetime]:
        return self._last_refreshed_at

    def on_update(self, callback: Callable[[Views], None]) -> None:
        """Register a callback invoked with the new views after each refresh."""
        self._subscribers.append(callback)

    async def _fetch(self) -> tuple[list[EquipmentItem], list[Booking]]:
        if self._fetch_snapshot is not None:
            # one read per refresh keeps equipment and bookings from the same version
            snapshot = await self._fetch_snapshot()
            return snapshot.equipment, snapshot.bookings
        equipment, bookings = await asyncio.gather(
            self._fetch_equipment(), self._fetch_bookings()
        )
        return equipment, bookings

    async def refresh(self) -> Views:
        """Fetch a fresh snapshot and recompute every equipment view.

        Fetch errors propagate; the previously computed views are kept.
        """
        refresh_id = new_refresh_id()
        try:
            equipment, bookings = await self._fetch()
        except Exception as e:
            logger.warning("Refresh %s failed to fetch snapshot: %s", refresh_id, e)
            raise

        now = self._clock()
        self._views = self._aggregator.compute_status(equipment, bookings, now)
        self._last_refreshed_at = now
        self.refresh_count += 1
        logger.debug("Refresh %s complete at %s", refresh_id, now.isoformat())

        for callback in self._subscribers:
            callback(self._views)
        return self._views

    async def poll(
        self, interval: Optional[float] = None, iterations: Optional[int] = None
    ) -> None:
        """Refresh on a fixed interval until cancelled or ``iterations`` is reached.

        A failed refresh is logged and retried on the next tick.
        """
        interval = settings.refresh.poll_interval_seconds if interval is None else interval
        completed = 0
        while iterations is None or completed < iterations:
            try:
                await self.refresh()
            except Exception as e:
                logger.error("Polling refresh failed, keeping previous views: %s", e)
            completed += 1
            if iterations is not None and completed >= iterations:
                break
            await asyncio.sleep(interval)
