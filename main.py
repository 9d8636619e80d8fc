"""
Equipment availability board entry point.

Reads equipment and reservations from the configured snapshot file when it
exists, otherwise from the seeded demo stores, and prints the board once or
keeps refreshing it on the configured polling interval.

Usage:
    One-shot board: python main.py
    Polling mode:   python main.py watch
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from src.availability.refresher import AvailabilityBoard
from src.availability.report import format_board
from src.config import settings

logger = logging.getLogger(__name__)


def _build_board() -> AvailabilityBoard:
    """Wire the board to the snapshot file or the demo stores."""
    snapshot_path = Path(settings.refresh.snapshot_path)
    if snapshot_path.exists():
        from src.tools.snapshot import load_snapshot

        async def fetch_snapshot():
            return load_snapshot(snapshot_path)

        logger.info("Reading snapshot from %s", snapshot_path)
        return AvailabilityBoard(fetch_snapshot=fetch_snapshot)

    from console_demo import seed_demo_data
    from src.tools.equipment import fetch_equipment
    from src.tools.reservations import fetch_reservations

    seed_demo_data(datetime.now().date())
    logger.info("Snapshot %s not found, using demo data", snapshot_path)
    return AvailabilityBoard(fetch_equipment, fetch_reservations)


def _print_board(views, now: datetime) -> None:
    sys.stdout.write(format_board(views.values(), now=now) + "\n\n")


async def _run_once() -> None:
    board = _build_board()
    views = await board.refresh()
    _print_board(views, board.last_refreshed_at)


async def _run_watch_mode() -> None:
    board = _build_board()
    board.on_update(lambda views: _print_board(views, board.last_refreshed_at))
    await board.poll()


if __name__ == "__main__":
    try:
        if len(sys.argv) > 1 and sys.argv[1] == "watch":
            asyncio.run(_run_watch_mode())
        else:
            asyncio.run(_run_once())
    except KeyboardInterrupt:
        logger.info("Stopped")
