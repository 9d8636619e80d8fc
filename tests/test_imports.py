"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_reservation_schema(self):
        from src.schemas.reservation_schema import (
            Booking, EquipmentStatus, EquipmentStatusView, ResolvedInterval,
        )
        assert EquipmentStatus.AVAILABLE == "available"
        assert EquipmentStatus.IN_USE == "in_use"

    def test_import_equipment_schema(self):
        from src.schemas.equipment_schema import EquipmentItem
        item = EquipmentItem(id="eq-1", name="Centrifuge A")
        assert item.type is None
        assert item.status == "Available"


class TestAvailabilityImports:
    def test_package_reexports(self):
        from src.availability import (
            AvailabilityAggregator, AvailabilityBoard, MalformedBookingError,
            compute_status, resolve, resolve_end, resolve_interval,
        )
        assert callable(compute_status)
        assert callable(resolve_end)

    def test_import_report(self):
        from src.availability.report import format_board, format_upcoming
        assert callable(format_board)

    def test_import_cli(self):
        from src.availability.run_status import main
        assert callable(main)


class TestToolImports:
    def test_import_equipment(self):
        from src.tools.equipment import add_equipment, list_equipment, fetch_equipment
        assert callable(add_equipment)

    def test_import_reservations(self):
        from src.tools.reservations import (
            create_reservation, delete_reservation, list_reservations, fetch_reservations,
        )
        assert callable(create_reservation)

    def test_import_snapshot(self):
        from src.tools.snapshot import Snapshot, load_snapshot
        assert Snapshot().bookings == []


class TestInfraImports:
    def test_import_config(self):
        from src.config import settings
        assert settings.lab.name

    def test_import_logging_context(self):
        from src.logging_context import get_refresh_logger, set_refresh_id, get_refresh_id
        set_refresh_id("REFRESH-test")
        assert get_refresh_id() == "REFRESH-test"
        logger = get_refresh_logger("test")
        assert logger is not None
