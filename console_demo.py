"""
Offline console demo: walks the booking wizard end to end with mock data.

Uses the real wizard, state machine, cost calculator, availability
validator, and the mock submission endpoint. No network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario other
    python console_demo.py --scenario failure
"""

import argparse
import asyncio
import sys
from datetime import date, timedelta

from toltimed.schemas.booking_schema import BookingResult, ScheduleFrequency, Weekday
from toltimed.tools import booking as booking_tool
from toltimed.tools.practitioners import get_all_practitioners
from toltimed.tools.services import get_all_services
from toltimed.utils import format_currency
from toltimed.wizard import BookingWizard

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleNotifier:
    def success(self, message: str) -> None:
        print(f"{GREEN}{BOLD}[toast]{RESET} {GREEN}{message}{RESET}")

    def failure(self, message: str) -> None:
        print(f"{RED}{BOLD}[toast]{RESET} {RED}{message}{RESET}")


class ConsoleNavigator:
    def to_receipt(self, result: BookingResult) -> None:
        print(f"{DIM}  >> navigate: /patient/receipt (ref {result.booking_ref}){RESET}")


def show_stage(wizard: BookingWizard) -> None:
    snap = wizard.snapshot()
    print(f"\n{BOLD}== {snap.title}{RESET} {DIM}{snap.description}{RESET}")


def report(errors: list[str]) -> None:
    for error in errors:
        print(f"{YELLOW}  ! {error}{RESET}")


async def run(scenario: str) -> int:
    wizard = BookingWizard(
        get_all_services(),
        get_all_practitioners(),
        submit_fn=booking_tool.submit_booking,
        notifier=ConsoleNotifier(),
        navigator=ConsoleNavigator(),
    )

    show_stage(wizard)
    for service in wizard.search_services("wound"):
        wizard.toggle_service(service)
        print(f"  + {service.name} ({format_currency(service.price or 0)}/session)")
    wizard.adjust_service("np-001", "days", increment=True)
    wizard.adjust_service("np-001", "days", increment=True)
    print(f"  cart total: {format_currency(wizard.snapshot().cart_total)}")
    report(wizard.advance())

    show_stage(wizard)
    chosen = wizard.search_practitioners("wound care")[0]
    wizard.select_practitioner(chosen)
    print(f"  chose {chosen.name} (rating {chosen.rating_display})")
    report(wizard.advance())

    show_stage(wizard)
    if scenario == "other":
        wizard.set_frequency(ScheduleFrequency.SPECIFIC_DAYS)
        wizard.toggle_day(Weekday.MONDAY)
        wizard.toggle_day(Weekday.WEDNESDAY)
        wizard.set_total_days(10)
    report(wizard.advance())  # no start date yet
    wizard.set_start_date(date.today() + timedelta(days=1))
    snap = wizard.snapshot()
    print(f"  {snap.schedule_description}: {snap.multiplier} sessions, "
          f"{format_currency(snap.total_cost)}")
    report(wizard.advance())

    show_stage(wizard)
    check = wizard.select_time("18:00")
    if not check.valid:
        report([check.error or ""])
    check = wizard.select_time("10:00")
    print(f"  time 10:00 valid: {check.valid}")
    report(wizard.advance())

    show_stage(wizard)
    if scenario == "other":
        wizard.choose_subject(False)
        wizard.update_details(
            first_name="Chidi", last_name="Okafor", email="chidi@example.com",
            phone="+234 803 123 4567", address="12 Marina Rd, Lagos",
            relationship="Son",
        )
    else:
        wizard.choose_subject(True)
        wizard.update_details(address="12 Marina Rd, Lagos")

    if scenario == "failure":
        booking_tool.fail_next("Practitioner no longer accepts bookings")
        await wizard.submit()
        print(f"{DIM}  >> stage after failure: {wizard.stage.value}{RESET}")

    result = await wizard.submit()
    print(f"{DIM}  >> trace: {' -> '.join(wizard.get_state_trace())}{RESET}")
    return 0 if result.success else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Toltimed booking wizard demo")
    parser.add_argument("--scenario", choices=["self", "other", "failure"], default="self")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.scenario)))


if __name__ == "__main__":
    main()
