"""Tests for loading equipment and reservation snapshots."""

import json

import pytest
from pydantic import ValidationError

from src.tools.snapshot import load_snapshot, parse_snapshot

SNAPSHOT = {
    "equipment": [
        {"id": "eq-1", "name": "Centrifuge A", "type": "Centrifuge", "location": "Lab 1"},
        {"id": "eq-2", "name": "-80 Freezer"},
    ],
    "reservations": [
        {
            "id": "r1",
            "equipment": "Centrifuge A",
            "project": "Project X",
            "date": "2024-06-01",
            "start_time": "08:00:00",
            "end_time": "09:00:00",
            "reserved_by": "A. Diallo",
        },
        {
            "id": "r2",
            "equipment": "Centrifuge A",
            "project": "Project Y",
            "date": "2024-06-01",
            "start_time": "09:00",
            "end_time": "10:00",
        },
    ],
}


class TestParseSnapshot:
    def test_parses_all_records(self):
        snapshot = parse_snapshot(SNAPSHOT)
        assert [e.name for e in snapshot.equipment] == ["Centrifuge A", "-80 Freezer"]
        assert [b.id for b in snapshot.bookings] == ["r1", "r2"]
        assert snapshot.bookings[0].start_time == "08:00"
        assert snapshot.bookings[0].reserved_by == "A. Diallo"
        assert snapshot.skipped == []

    def test_missing_sections_are_empty(self):
        snapshot = parse_snapshot({})
        assert snapshot.equipment == []
        assert snapshot.bookings == []

    def test_invalid_record_skipped(self):
        data = {
            "equipment": SNAPSHOT["equipment"],
            "reservations": SNAPSHOT["reservations"] + [
                {"id": "bad", "equipment": "Centrifuge A", "date": "not-a-date",
                 "start_time": "09:00", "end_time": "10:00", "project": "P"},
            ],
        }
        snapshot = parse_snapshot(data)
        assert len(snapshot.bookings) == 2
        assert snapshot.skipped == ["reservation:bad"]

    def test_invalid_record_raises_in_strict_mode(self):
        data = {"equipment": [{"name": "no id"}]}
        with pytest.raises(ValidationError):
            parse_snapshot(data, strict=True)

    def test_section_must_be_list(self):
        with pytest.raises(ValueError, match="must be a list"):
            parse_snapshot({"equipment": {"id": "eq-1"}})


class TestLoadSnapshot:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
        snapshot = load_snapshot(path)
        assert len(snapshot.equipment) == 2
        assert len(snapshot.bookings) == 2

    def test_root_must_be_object(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError, match="root must be an object"):
            load_snapshot(path)
