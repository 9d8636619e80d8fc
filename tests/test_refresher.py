"""Tests for the caller-side availability refresher."""

import pytest

from src.availability.refresher import AvailabilityBoard
from src.schemas.reservation_schema import EquipmentStatus
from src.tools.snapshot import Snapshot
from tests.conftest import at, make_booking, make_equipment

CENTRIFUGE = make_equipment("Centrifuge A", "eq-1")


def _fetchers(equipment, bookings):
    async def fetch_equipment():
        return list(equipment)

    async def fetch_bookings():
        return list(bookings)

    return fetch_equipment, fetch_bookings


class _Clock:
    def __init__(self, *instants):
        self._instants = list(instants)

    def __call__(self):
        return self._instants.pop(0)


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_computes_views(self):
        bookings = [make_booking("b1", "09:00", "10:00", owner="Project Y")]
        board = AvailabilityBoard(*_fetchers([CENTRIFUGE], bookings), clock=lambda: at(9, 30))
        views = await board.refresh()
        assert views["eq-1"].status == EquipmentStatus.IN_USE
        assert board.views is views
        assert board.last_refreshed_at == at(9, 30)
        assert board.refresh_count == 1

    @pytest.mark.asyncio
    async def test_clock_read_once_per_refresh(self):
        bookings = [make_booking("b1", "09:00", "10:00")]
        board = AvailabilityBoard(
            *_fetchers([CENTRIFUGE], bookings), clock=_Clock(at(9, 30), at(11))
        )
        assert (await board.refresh())["eq-1"].status == EquipmentStatus.IN_USE
        assert (await board.refresh())["eq-1"].status == EquipmentStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_subscribers_notified(self):
        received = []
        board = AvailabilityBoard(*_fetchers([CENTRIFUGE], []), clock=lambda: at(9))
        board.on_update(received.append)
        await board.refresh()
        assert len(received) == 1
        assert "eq-1" in received[0]

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_previous_views(self):
        calls = {"n": 0}

        async def flaky_bookings():
            calls["n"] += 1
            if calls["n"] > 1:
                raise ConnectionError("database unreachable")
            return []

        async def fetch_equipment():
            return [CENTRIFUGE]

        board = AvailabilityBoard(fetch_equipment, flaky_bookings, clock=lambda: at(9))
        first = await board.refresh()
        with pytest.raises(ConnectionError):
            await board.refresh()
        assert board.views is first
        assert board.refresh_count == 1


class TestPoll:
    @pytest.mark.asyncio
    async def test_poll_runs_requested_iterations(self):
        board = AvailabilityBoard(*_fetchers([CENTRIFUGE], []), clock=lambda: at(9))
        await board.poll(interval=0, iterations=3)
        assert board.refresh_count == 3

    @pytest.mark.asyncio
    async def test_poll_survives_failed_refresh(self):
        calls = {"n": 0}

        async def flaky_equipment():
            calls["n"] += 1
            if calls["n"] == 1:
                raise TimeoutError("slow network")
            return [CENTRIFUGE]

        async def fetch_bookings():
            return []

        board = AvailabilityBoard(flaky_equipment, fetch_bookings, clock=lambda: at(9))
        await board.poll(interval=0, iterations=2)
        assert board.refresh_count == 1
        assert "eq-1" in board.views


class TestSnapshotFetcher:
    @pytest.mark.asyncio
    async def test_one_snapshot_read_per_refresh(self):
        reads = []

        async def fetch_snapshot():
            reads.append(1)
            return Snapshot(
                equipment=[CENTRIFUGE],
                bookings=[make_booking("b1", "09:00", "10:00", owner="Project Y")],
            )

        board = AvailabilityBoard(fetch_snapshot=fetch_snapshot, clock=lambda: at(9, 30))
        views = await board.refresh()
        assert len(reads) == 1
        assert views["eq-1"].current_owner == "Project Y"

        await board.refresh()
        assert len(reads) == 2

    def test_requires_a_data_source(self):
        async def fetch_equipment():
            return []

        with pytest.raises(ValueError, match="fetch_snapshot"):
            AvailabilityBoard(fetch_equipment)
