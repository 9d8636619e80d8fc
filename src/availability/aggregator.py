"""
Per-equipment availability derived from a snapshot of reservations.

For every equipment item the aggregator collects its bookings, resolves
their intervals, drops the ones that have already ended, orders the rest
chronologically, and reports whether the item is in use right now, who
holds it, when it frees up, and what is booked next.

The computation is pure: ``now`` is always passed in, nothing is cached,
and a malformed booking is skipped rather than failing the whole board.

Usage:
    views = compute_status(equipment, bookings, now=datetime(2024, 6, 1, 9, 30))
    view = views["eq-centrifuge-a"]
    view.status, view.current_owner, view.next_available_at
"""

import datetime as dt
from typing import Iterable, Optional

from src.availability.interval_resolver import MalformedBookingError, resolve_interval
from src.logging_context import get_refresh_logger
from src.schemas.equipment_schema import EquipmentItem
from src.schemas.reservation_schema import (
    Booking,
    EquipmentStatus,
    EquipmentStatusView,
    ResolvedInterval,
)

logger = get_refresh_logger(__name__)

ResolvedBooking = tuple[Booking, ResolvedInterval]


class AvailabilityAggregator:
    """Computes EquipmentStatusView objects from equipment and bookings.

    Bookings that carry an ``equipment_id`` are matched to the equipment
    table by id. Bookings without one are matched by exact, case-sensitive
    equipment name. Overlapping bookings are never rejected; the earliest
    one containing ``now`` is the active booking.
    """

    def __init__(
        self, midnight: Optional[str] = None, end_of_day: Optional[str] = None
    ) -> None:
        self._midnight = midnight
        self._end_of_day = end_of_day

    def compute_status(
        self,
        equipment: Iterable[EquipmentItem],
        bookings: Iterable[Booking],
        now: dt.datetime,
    ) -> dict[str, EquipmentStatusView]:
        """Compute the status view of every equipment item, keyed by equipment id."""
        items = list(equipment)
        grouped = self._group_bookings(items, bookings)

        views: dict[str, EquipmentStatusView] = {}
        for item in items:
            entries = grouped[item.id]
            logger.debug("Processing %s with %d reservation(s)", item.name, len(entries))
            views[item.id] = self._derive_view(item, entries, now)

        in_use = sum(1 for v in views.values() if not v.is_available)
        logger.info(
            "Computed availability for %d equipment item(s), %d in use", len(views), in_use
        )
        return views

    def status_for(
        self, item: EquipmentItem, bookings: Iterable[Booking], now: dt.datetime
    ) -> EquipmentStatusView:
        """Compute the status view of a single equipment item."""
        return self.compute_status([item], bookings, now)[item.id]

    def upcoming_reservations(
        self, item: EquipmentItem, bookings: Iterable[Booking], now: dt.datetime
    ) -> list[Booking]:
        """Bookings of ``item`` that have not started yet (start >= now), ascending."""
        entries = self._group_bookings([item], bookings)[item.id]
        upcoming = [booking for booking, interval in entries if interval.start >= now]
        upcoming.sort(key=lambda b: b.sort_key)
        return upcoming

    def _group_bookings(
        self, items: list[EquipmentItem], bookings: Iterable[Booking]
    ) -> dict[str, list[ResolvedBooking]]:
        """Resolve bookings once and assign them to equipment, keeping input order."""
        grouped: dict[str, list[ResolvedBooking]] = {item.id: [] for item in items}
        ids_by_name: dict[str, list[str]] = {}
        for item in items:
            ids_by_name.setdefault(item.name, []).append(item.id)

        for booking in bookings:
            if booking.equipment_id is not None:
                targets = [booking.equipment_id] if booking.equipment_id in grouped else []
            elif booking.equipment_name:
                targets = ids_by_name.get(booking.equipment_name, [])
                if targets:
                    logger.debug(
                        "Booking %s matched by name '%s'", booking.id, booking.equipment_name
                    )
            else:
                logger.warning("Skipping booking %s: no equipment reference", booking.id)
                continue

            if not targets:
                logger.debug("Booking %s matches no listed equipment", booking.id)
                continue

            try:
                interval = resolve_interval(
                    booking, midnight=self._midnight, end_of_day=self._end_of_day
                )
            except MalformedBookingError as e:
                logger.warning("Skipping booking %s: %s", booking.id, e)
                continue

            for equipment_id in targets:
                grouped[equipment_id].append((booking, interval))

        return grouped

    def _derive_view(
        self, item: EquipmentItem, entries: list[ResolvedBooking], now: dt.datetime
    ) -> EquipmentStatusView:
        # end == now still counts: the booking is active at its closing instant
        kept = [entry for entry in entries if entry[1].end >= now]
        kept.sort(key=lambda entry: entry[0].sort_key)

        active_index: Optional[int] = next(
            (i for i, (_, interval) in enumerate(kept) if interval.contains(now)), None
        )

        if active_index is None:
            return EquipmentStatusView(
                equipment_id=item.id,
                equipment_name=item.name,
                equipment_type=item.type,
                status=EquipmentStatus.AVAILABLE,
                next_available_at=now,
                upcoming_bookings=[booking for booking, _ in kept],
            )

        active_booking, active_interval = kept[active_index]
        return EquipmentStatusView(
            equipment_id=item.id,
            equipment_name=item.name,
            equipment_type=item.type,
            status=EquipmentStatus.IN_USE,
            active_booking=active_booking,
            next_available_at=active_interval.end,
            current_owner=active_booking.owner,
            # overlapping bookings already under way are neither active nor upcoming
            upcoming_bookings=[
                booking
                for i, (booking, interval) in enumerate(kept)
                if i != active_index and interval.start > now
            ],
        )


_default_aggregator = AvailabilityAggregator()


def compute_status(
    equipment: Iterable[EquipmentItem],
    bookings: Iterable[Booking],
    now: dt.datetime,
) -> dict[str, EquipmentStatusView]:
    """Compute per-equipment status with the configured resolver rules."""
    return _default_aggregator.compute_status(equipment, bookings, now)
