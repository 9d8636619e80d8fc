"""Tests for the offline console demo."""

from datetime import date, datetime

import pytest

from console_demo import ConsoleSession, seed_demo_data
from src.tools.equipment import list_equipment
from src.tools.reservations import list_reservations

pytestmark = pytest.mark.usefixtures("clean_stores")


class TestSeedData:
    def test_seeds_equipment_and_reservations(self):
        seed_demo_data(date(2024, 6, 1))
        assert len(list_equipment()) == 4
        assert len(list_reservations()) == 5
        assert all(b.equipment_id for b in list_reservations())


class TestConsoleSession:
    def test_board_shows_current_holder(self, capsys):
        session = ConsoleSession(now=datetime(2024, 6, 1, 9, 30))
        session._process_input("board")
        out = capsys.readouterr().out
        assert "Project Y" in out

    def test_overlap_scenario_runs(self, capsys):
        session = ConsoleSession(now=datetime(2024, 6, 1, 9, 30))
        session.run_scenario("overlap")
        out = capsys.readouterr().out
        assert "Scenario 'overlap' complete." in out
        assert "Project Z" in out

    def test_rename_keeps_reservations(self, capsys):
        session = ConsoleSession(now=datetime(2024, 6, 1, 13, 30))
        session._process_input("rename PCR Thermocycler|Thermocycler 2")
        session._process_input("board")
        out = capsys.readouterr().out
        assert "Thermocycler 2" in out
        assert "Malaria Surveillance" in out

    def test_unknown_command(self, capsys):
        session = ConsoleSession(now=datetime(2024, 6, 1, 9, 30))
        session._process_input("launch rocket")
        assert "Unknown command" in capsys.readouterr().out
