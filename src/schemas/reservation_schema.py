"""Reservation records and the availability views derived from them."""

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils import date_key, normalize_time


class EquipmentStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"


class Booking(BaseModel):
    """One reservation of one equipment item.

    Wire names follow the reservations table (``equipment``, ``project``);
    the Python attribute names are used everywhere else.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    equipment_name: Optional[str] = Field(default=None, alias="equipment")
    date: dt.date
    start_time: str
    end_time: str
    owner: str = Field(alias="project")
    reserved_by: Optional[str] = None
    equipment_id: Optional[str] = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _trim_seconds(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_time(value)
        return value

    @property
    def sort_key(self) -> tuple[str, str]:
        """Chronological ordering key: zero-padded date then start time."""
        return date_key(self.date), self.start_time


@dataclass(frozen=True)
class ResolvedInterval:
    """Absolute naive start/end instants of a booking."""
    start: dt.datetime
    end: dt.datetime

    def contains(self, instant: dt.datetime) -> bool:
        """Inclusive on both bounds."""
        return self.start <= instant <= self.end


@dataclass
class EquipmentStatusView:
    """Availability of one equipment item at one evaluation instant."""
    equipment_id: str
    equipment_name: str
    status: EquipmentStatus
    equipment_type: Optional[str] = None
    active_booking: Optional[Booking] = None
    next_available_at: Optional[dt.datetime] = None
    current_owner: Optional[str] = None
    upcoming_bookings: list[Booking] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return self.status == EquipmentStatus.AVAILABLE

    @property
    def upcoming_count(self) -> int:
        return len(self.upcoming_bookings)
