"""
Load an equipment + reservation snapshot from a JSON export.

The file holds two lists under ``equipment`` and ``reservations``, using
the column names of the lab database. Invalid records are skipped with a
warning so one bad row does not blank the whole board.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ValidationError

from src.schemas.equipment_schema import EquipmentItem
from src.schemas.reservation_schema import Booking

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """In-memory copy of the data the availability engine reads."""
    equipment: list[EquipmentItem] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _parse_records(
    raw: Any, model: type[BaseModel], kind: str, skipped: list[str], strict: bool
) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"Snapshot field '{kind}' must be a list, got {type(raw).__name__}")

    records = []
    for index, entry in enumerate(raw):
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            if strict:
                raise
            label = entry.get("id", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            skipped.append(f"{kind}:{label}")
            logger.warning("Skipping %s record %s: %d error(s)", kind, label, e.error_count())
    return records


def parse_snapshot(data: dict[str, Any], *, strict: bool = False) -> Snapshot:
    """Build a Snapshot from already-decoded JSON data.

    Args:
        data: Mapping with ``equipment`` and ``reservations`` lists.
        strict: If True, raise on the first invalid record instead of skipping.
    """
    skipped: list[str] = []
    equipment = _parse_records(data.get("equipment"), EquipmentItem, "equipment", skipped, strict)
    bookings = _parse_records(data.get("reservations"), Booking, "reservation", skipped, strict)

    if skipped:
        logger.warning(
            "Skipped %d of %d snapshot records",
            len(skipped),
            len(skipped) + len(equipment) + len(bookings),
        )
    return Snapshot(equipment=equipment, bookings=bookings, skipped=skipped)


def load_snapshot(path: Union[str, Path], *, strict: bool = False) -> Snapshot:
    """Load a snapshot from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot root must be an object: {path}")
    snapshot = parse_snapshot(data, strict=strict)
    logger.debug(
        "Loaded snapshot %s: %d equipment, %d reservation(s)",
        path, len(snapshot.equipment), len(snapshot.bookings),
    )
    return snapshot
