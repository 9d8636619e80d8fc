"""Equipment inventory data models."""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class EquipmentItem(BaseModel):
    """Shared lab equipment record from the inventory.

    ``status`` is the inventory's own condition label (e.g. "Maintenance").
    Availability is derived from reservations and never read from it.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: Optional[str] = None
    status: str = "Available"
    location: str = ""
    serial_number: Optional[str] = None
    last_maintenance: Optional[str] = None
