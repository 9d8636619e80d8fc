"""
CLI entry point for computing equipment availability from a snapshot file.

Usage:
    python -m src.availability.run_status --snapshot data/snapshot.json
    python -m src.availability.run_status --snapshot data/snapshot.json --now 2024-06-01T09:30
    python -m src.availability.run_status --snapshot data/snapshot.json --equipment "Centrifuge A"
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.availability.aggregator import compute_status
from src.availability.report import format_board, format_upcoming
from src.config import settings
from src.tools.snapshot import load_snapshot

logger = logging.getLogger(__name__)


def _parse_now(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid --now timestamp: {value!r}") from None


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Show equipment availability computed from a reservation snapshot."
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=settings.refresh.snapshot_path,
        help="Path to the JSON snapshot with equipment and reservations.",
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Evaluation instant as ISO timestamp (default: current local time).",
    )
    parser.add_argument(
        "--equipment",
        type=str,
        default=None,
        help="Show the upcoming reservation list for this equipment name.",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Path to write the status report (default: stdout).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        now = _parse_now(args.now)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        logger.error("Snapshot file not found: %s", snapshot_path)
        sys.exit(1)

    snapshot = load_snapshot(snapshot_path)
    logger.info(
        "Loaded %d equipment item(s) and %d reservation(s) from %s",
        len(snapshot.equipment), len(snapshot.bookings), snapshot_path,
    )

    views = compute_status(snapshot.equipment, snapshot.bookings, now)

    if args.equipment:
        matching = [v for v in views.values() if v.equipment_name == args.equipment]
        if not matching:
            logger.error("Equipment not found in snapshot: %s", args.equipment)
            sys.exit(1)
        output = "\n\n".join(format_upcoming(v, limit=0) for v in matching)
    else:
        output = format_board(views.values(), now=now)

    if args.report:
        report_path = Path(args.report)
        report_path.write_text(output, encoding="utf-8")
        logger.info("Report written to %s", report_path)
    else:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
