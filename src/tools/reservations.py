"""
Mock equipment reservation store.

In production, this would be the ``equipment_reservations`` table of the
lab's hosted database. Overlapping reservations are accepted: nothing here
rejects a booking that collides with another one for the same equipment.
"""

import logging
import uuid
from typing import Any, Optional, TypedDict

from pydantic import ValidationError

from src.schemas.reservation_schema import Booking
from src.tools.equipment import find_equipment_by_name

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("equipment", "project", "date", "start_time", "end_time", "reserved_by")


class ReservationResult(TypedDict, total=False):
    """Result from create_reservation, update_reservation, or delete_reservation."""

    success: bool
    message: str
    reservation_id: str
    details: Booking


_reservations: dict[str, Booking] = {}


def _missing_fields(values: dict[str, Optional[str]]) -> list[str]:
    return [
        field_name
        for field_name in REQUIRED_FIELDS
        if not values.get(field_name) or not str(values[field_name]).strip()
    ]


def create_reservation(
    equipment: str,
    project: str,
    date: str,
    start_time: str,
    end_time: str,
    reserved_by: str,
) -> ReservationResult:
    """Create a reservation and link it to the equipment item it names."""
    values = {
        "equipment": equipment,
        "project": project,
        "date": date,
        "start_time": start_time,
        "end_time": end_time,
        "reserved_by": reserved_by,
    }
    missing = _missing_fields(values)
    if missing:
        return {
            "success": False,
            "message": f"Cannot create reservation - missing required fields: {', '.join(missing)}.",
        }

    item = find_equipment_by_name(equipment)
    reservation_id = f"RES-{uuid.uuid4().hex[:8].upper()}"
    try:
        booking = Booking.model_validate(
            {**values, "id": reservation_id, "equipment_id": item.id if item else None}
        )
    except ValidationError as e:
        return {"success": False, "message": f"Invalid reservation: {e.error_count()} error(s)."}

    _reservations[reservation_id] = booking
    logger.info(
        "Reservation created: %s for %s on %s %s-%s",
        reservation_id, equipment, booking.date, booking.start_time, booking.end_time,
    )
    return {
        "success": True,
        "reservation_id": reservation_id,
        "message": (
            f"Reservation {reservation_id} created for {equipment} on {booking.date} "
            f"from {booking.start_time} to {booking.end_time}."
        ),
        "details": booking,
    }


def update_reservation(reservation_id: str, **changes: Any) -> ReservationResult:
    """Update an existing reservation. Field names use the wire form."""
    current = _reservations.get(reservation_id)
    if current is None:
        return {"success": False, "message": f"Reservation {reservation_id} not found."}

    values = {**current.model_dump(by_alias=True), **changes, "id": reservation_id}
    if "equipment" in changes:
        item = find_equipment_by_name(changes["equipment"])
        values["equipment_id"] = item.id if item else None

    try:
        updated = Booking.model_validate(values)
    except ValidationError as e:
        return {"success": False, "message": f"Invalid reservation: {e.error_count()} error(s)."}

    _reservations[reservation_id] = updated
    logger.info("Reservation updated: %s", reservation_id)
    return {
        "success": True,
        "reservation_id": reservation_id,
        "message": f"Reservation {reservation_id} updated.",
        "details": updated,
    }


def delete_reservation(reservation_id: str) -> ReservationResult:
    """Delete a reservation by id."""
    if _reservations.pop(reservation_id, None) is None:
        return {"success": False, "message": f"Reservation {reservation_id} not found."}
    logger.info("Reservation deleted: %s", reservation_id)
    return {"success": True, "message": f"Reservation {reservation_id} deleted."}


def get_reservation(reservation_id: str) -> Optional[Booking]:
    """Retrieve a reservation by id."""
    return _reservations.get(reservation_id)


def list_reservations() -> list[Booking]:
    """All reservations ordered by date, then start time."""
    return sorted(_reservations.values(), key=lambda b: b.sort_key)


async def fetch_reservations() -> list[Booking]:
    """Async data-access boundary used by the refresher."""
    return list_reservations()


def reset() -> None:
    """Clear all reservations. Used by test fixtures for isolation."""
    _reservations.clear()
