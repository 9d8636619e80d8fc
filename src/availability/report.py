"""Plain-text rendering of equipment status views."""

import datetime as dt
from typing import Iterable, Optional

from src.config import settings
from src.schemas.reservation_schema import Booking, EquipmentStatusView

NO_VALUE = "—"


def describe_status(view: EquipmentStatusView) -> str:
    return "Available Now" if view.is_available else "In Use"


def describe_next_available(view: EquipmentStatusView) -> str:
    if view.is_available:
        return "Now"
    if view.next_available_at is None:
        return "Est. Unknown"
    at = view.next_available_at
    return f"Est. {at.date().isoformat()} at {at.strftime('%H:%M')}"


def describe_upcoming(view: EquipmentStatusView) -> str:
    count = view.upcoming_count
    if count == 0:
        return "No upcoming reservations"
    return f"View {count} {'reservation' if count == 1 else 'reservations'}"


def format_booking(booking: Booking) -> str:
    return (
        f"{booking.date.isoformat()}  {booking.start_time} - {booking.end_time}  "
        f"[{booking.owner}]"
    )


def format_board(
    views: Iterable[EquipmentStatusView],
    now: Optional[dt.datetime] = None,
    lab_name: Optional[str] = None,
) -> str:
    """Format the equipment availability table."""
    views = list(views)
    lab_name = lab_name or settings.lab.name

    lines = [
        "=" * 60,
        f"EQUIPMENT AVAILABILITY - {lab_name}",
    ]
    if now is not None:
        lines.append(f"As of {now.strftime('%Y-%m-%d %H:%M')} ({settings.lab.timezone_label})")
    lines.extend(["=" * 60, ""])

    if not views:
        lines.append("No equipment found")
        return "\n".join(lines)

    for view in views:
        lines.extend([
            view.equipment_name,
            f"  Type:           {view.equipment_type or 'N/A'}",
            f"  Status:         {describe_status(view)}",
            f"  Next available: {describe_next_available(view)}",
            f"  Current user:   {view.current_owner or NO_VALUE}",
            f"  Upcoming:       {describe_upcoming(view)}",
            "",
        ])
    return "\n".join(lines).rstrip("\n")


def format_upcoming(view: EquipmentStatusView, limit: Optional[int] = None) -> str:
    """Format the upcoming reservation list of one equipment item."""
    limit = settings.availability.upcoming_preview_limit if limit is None else limit
    lines = [f"Upcoming Reservations for {view.equipment_name}"]
    if not view.upcoming_bookings:
        lines.append("  No upcoming reservations")
        return "\n".join(lines)

    shown = view.upcoming_bookings[:limit] if limit else view.upcoming_bookings
    lines.extend(f"  {format_booking(b)}" for b in shown)
    hidden = view.upcoming_count - len(shown)
    if hidden > 0:
        lines.append(f"  ... and {hidden} more")
    return "\n".join(lines)
