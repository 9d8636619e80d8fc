"""
Offline console demo: a lab equipment board driven by typed commands.

Seeds the mock inventory and reservation store with a day of sample lab
bookings, then lets you book, cancel, rename, and move the clock to see
how availability changes. No database and no network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario overlap
    python console_demo.py --scenario rename
"""

import argparse
from datetime import date, datetime, time, timedelta
from typing import Optional

from src.availability.aggregator import compute_status
from src.availability.report import format_board, format_upcoming
from src.config import settings
from src.tools import equipment as equipment_tool
from src.tools import reservations as reservation_tool

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

HELP_TEXT = """Commands:
  board                                     show the availability board
  view <equipment>                          list upcoming reservations
  book <equipment>|<project>|<YYYY-MM-DD>|<HH:MM>|<HH:MM>|<reserved by>
  cancel <reservation id>                   delete a reservation
  rename <old name>|<new name>              rename an equipment item
  at <YYYY-MM-DDTHH:MM>                     move the demo clock
  list                                      list all reservations
  quit                                      exit"""


def seed_demo_data(today: date) -> None:
    """Fill the mock stores with sample equipment and reservations."""
    equipment_tool.reset()
    reservation_tool.reset()

    for name, kind, location in [
        ("Centrifuge A", "Centrifuge", "Lab 1"),
        ("PCR Thermocycler", "Thermocycler", "Lab 2"),
        ("Biosafety Cabinet", "Cabinet", "Culture Room"),
        ("-80 Freezer", "Freezer", "Storage"),
    ]:
        equipment_tool.add_equipment(name, type=kind, location=location)

    day = today.isoformat()
    tomorrow = (today + timedelta(days=1)).isoformat()
    for equipment, project, on, start, end, by in [
        ("Centrifuge A", "Project X", day, "08:00", "09:00", "A. Diallo"),
        ("Centrifuge A", "Project Y", day, "09:00", "10:00", "M. Sow"),
        ("Centrifuge A", "Project X", tomorrow, "14:00", "16:00", "A. Diallo"),
        ("PCR Thermocycler", "Malaria Surveillance", day, "13:00", "00:00", "F. Ndiaye"),
        ("Biosafety Cabinet", "DBS Processing", tomorrow, "09:00", "12:00", "K. Ba"),
    ]:
        reservation_tool.create_reservation(equipment, project, on, start, end, by)


class ConsoleSession:
    """Interactive availability board in the terminal."""

    SCENARIOS: dict[str, list[str]] = {
        "overlap": [
            "at {today}T09:30",
            "board",
            "book Centrifuge A|Project Z|{today}|09:45|11:00|J. Faye",
            "board",
            "view Centrifuge A",
        ],
        "rename": [
            "at {today}T13:30",
            "board",
            "rename PCR Thermocycler|Thermocycler 2",
            "board",
        ],
    }

    def __init__(self, now: Optional[datetime] = None) -> None:
        self.now = now or datetime.now().replace(second=0, microsecond=0)
        seed_demo_data(self.now.date())

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _views(self):
        return compute_status(
            equipment_tool.list_equipment(), reservation_tool.list_reservations(), self.now
        )

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        today = self.now.date().isoformat()
        for step in steps:
            command = step.format(today=today)
            print(f"\n{BLUE}> {RESET}{command}")
            self._process_input(command)
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self._banner("Console Demo")
        print(HELP_TEXT)
        self._process_input("board")

        while True:
            user_input = input(f"\n{BLUE}> {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self._process_input(user_input)

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  EQUIPMENT AVAILABILITY - {title}{RESET}")
        print(f"{BOLD}  Lab: {settings.lab.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def _process_input(self, text: str) -> None:
        command, _, rest = text.partition(" ")
        command = command.lower()
        rest = rest.strip()

        if command == "board":
            print(format_board(self._views().values(), now=self.now))
        elif command == "view":
            self._handle_view(rest)
        elif command == "book":
            self._handle_book(rest)
        elif command == "cancel":
            result = reservation_tool.delete_reservation(rest)
            self.say(result["message"])
        elif command == "rename":
            self._handle_rename(rest)
        elif command == "at":
            self._handle_clock(rest)
        elif command == "list":
            for booking in reservation_tool.list_reservations():
                print(
                    f"  {booking.id}  {booking.equipment_name}  {booking.date} "
                    f"{booking.start_time}-{booking.end_time}  {booking.owner}"
                )
        elif command == "help":
            print(HELP_TEXT)
        else:
            print(f"{YELLOW}Unknown command '{command}'. Type 'help'.{RESET}")

    def _handle_view(self, name: str) -> None:
        matching = [v for v in self._views().values() if v.equipment_name == name]
        if not matching:
            print(f"{YELLOW}No equipment named '{name}'.{RESET}")
            return
        for view in matching:
            print(format_upcoming(view, limit=0))

    def _handle_book(self, rest: str) -> None:
        parts = [p.strip() for p in rest.split("|")]
        if len(parts) != 6:
            print(f"{YELLOW}Usage: book <equipment>|<project>|<date>|<start>|<end>|<by>{RESET}")
            return
        result = reservation_tool.create_reservation(*parts)
        if result["success"]:
            self.say(result["message"])
        else:
            print(f"{RED}{result['message']}{RESET}")

    def _handle_rename(self, rest: str) -> None:
        old_name, _, new_name = (p.strip() for p in rest.partition("|"))
        item = equipment_tool.find_equipment_by_name(old_name)
        if item is None or not new_name:
            print(f"{YELLOW}Usage: rename <old name>|<new name>{RESET}")
            return
        result = equipment_tool.update_equipment(item.id, name=new_name)
        self.say(result["message"])
        self.system_log("Reservations keep their equipment id, so none are orphaned.")

    def _handle_clock(self, value: str) -> None:
        try:
            self.now = datetime.fromisoformat(value)
        except ValueError:
            print(f"{YELLOW}Invalid timestamp: {value}{RESET}")
            return
        self.system_log(f"Clock set to {self.now.strftime('%Y-%m-%d %H:%M')}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    now = datetime.combine(date.today(), time(9, 30)) if args.scenario else None
    session = ConsoleSession(now=now)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
