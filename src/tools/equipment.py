"""
Mock equipment inventory.

In production, this would read the ``equipment_items`` table of the lab's
hosted database. Renaming an item here never touches its reservations.
"""

import itertools
import logging
import uuid
from typing import Any, Optional, TypedDict

from pydantic import ValidationError

from src.schemas.equipment_schema import EquipmentItem

logger = logging.getLogger(__name__)


class EquipmentResult(TypedDict, total=False):
    """Result from add_equipment or update_equipment."""

    success: bool
    message: str
    equipment_id: str
    details: EquipmentItem


_equipment: dict[str, EquipmentItem] = {}
_created_seq: dict[str, int] = {}
_sequence = itertools.count()


def add_equipment(
    name: str,
    type: Optional[str] = None,
    location: str = "",
    status: str = "Available",
    serial_number: Optional[str] = None,
    last_maintenance: Optional[str] = None,
) -> EquipmentResult:
    """Register a new equipment item."""
    if not name or not name.strip():
        return {"success": False, "message": "Cannot add equipment - name is required."}

    equipment_id = f"EQ-{uuid.uuid4().hex[:8].upper()}"
    item = EquipmentItem(
        id=equipment_id,
        name=name.strip(),
        type=type,
        location=location,
        status=status,
        serial_number=serial_number,
        last_maintenance=last_maintenance,
    )
    _equipment[equipment_id] = item
    _created_seq[equipment_id] = next(_sequence)
    logger.info("Equipment added: %s (%s)", item.name, equipment_id)

    return {
        "success": True,
        "equipment_id": equipment_id,
        "message": f"Equipment {item.name} added.",
        "details": item,
    }


def update_equipment(equipment_id: str, **changes: Any) -> EquipmentResult:
    """Update fields of an existing equipment item."""
    current = _equipment.get(equipment_id)
    if current is None:
        return {"success": False, "message": f"Equipment {equipment_id} not found."}

    changes.pop("id", None)
    try:
        updated = EquipmentItem(**{**current.model_dump(), **changes})
    except ValidationError as e:
        return {"success": False, "message": f"Invalid equipment update: {e.error_count()} error(s)."}

    _equipment[equipment_id] = updated
    if updated.name != current.name:
        logger.info("Equipment renamed: '%s' -> '%s'", current.name, updated.name)
    return {
        "success": True,
        "equipment_id": equipment_id,
        "message": f"Equipment {equipment_id} updated.",
        "details": updated,
    }


def get_equipment(equipment_id: str) -> Optional[EquipmentItem]:
    """Retrieve an equipment item by id."""
    return _equipment.get(equipment_id)


def find_equipment_by_name(name: str) -> Optional[EquipmentItem]:
    """Return the first item whose name matches exactly."""
    for item in _equipment.values():
        if item.name == name:
            return item
    return None


def list_equipment() -> list[EquipmentItem]:
    """All equipment, newest first."""
    return sorted(
        _equipment.values(), key=lambda item: _created_seq[item.id], reverse=True
    )


async def fetch_equipment() -> list[EquipmentItem]:
    """Async data-access boundary used by the refresher."""
    return list_equipment()


def reset() -> None:
    """Clear all equipment. Used by test fixtures for isolation."""
    _equipment.clear()
    _created_seq.clear()
