"""Shared test fixtures and helpers."""

from datetime import date, datetime
from typing import Optional

import pytest

from src.availability.aggregator import AvailabilityAggregator
from src.schemas.equipment_schema import EquipmentItem
from src.schemas.reservation_schema import Booking
from src.tools import equipment as equipment_tool
from src.tools import reservations as reservation_tool

TODAY = date(2024, 6, 1)


@pytest.fixture
def aggregator():
    return AvailabilityAggregator()


@pytest.fixture
def clean_stores():
    equipment_tool.reset()
    reservation_tool.reset()
    yield
    equipment_tool.reset()
    reservation_tool.reset()


def at(hour: int, minute: int = 0, day: date = TODAY) -> datetime:
    """Naive local instant on the test day."""
    return datetime(day.year, day.month, day.day, hour, minute)


def make_equipment(
    name: str = "Centrifuge A",
    equipment_id: Optional[str] = None,
    type: Optional[str] = "Centrifuge",
) -> EquipmentItem:
    """Helper to create an EquipmentItem."""
    return EquipmentItem(
        id=equipment_id or f"eq-{name.lower().replace(' ', '-')}",
        name=name,
        type=type,
    )


def make_booking(
    booking_id: str,
    start_time: str,
    end_time: str,
    owner: str = "Project X",
    equipment_name: Optional[str] = "Centrifuge A",
    day: date = TODAY,
    equipment_id: Optional[str] = None,
) -> Booking:
    """Helper to create a Booking with sensible defaults."""
    return Booking(
        id=booking_id,
        equipment_name=equipment_name,
        date=day,
        start_time=start_time,
        end_time=end_time,
        owner=owner,
        equipment_id=equipment_id,
    )
