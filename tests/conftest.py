"""Shared test fixtures and helpers."""

from datetime import date, timedelta
from typing import Optional

import pytest

from toltimed.schemas.booking_schema import BookingPayload, BookingResult
from toltimed.schemas.catalog_schema import Service, ServiceCategory
from toltimed.schemas.practitioner_schema import Practitioner
from toltimed.tools import booking as booking_tool
from toltimed.tools.practitioners import get_all_practitioners
from toltimed.tools.services import get_all_services
from toltimed.wizard.booking_wizard import BookingWizard
from toltimed.wizard.cart import ServiceCart
from toltimed.wizard.schedule import ScheduleConfigurator
from toltimed.wizard.state_machine import WizardStateMachine

TOMORROW = date.today() + timedelta(days=1)


@pytest.fixture(autouse=True)
def _reset_booking_store():
    booking_tool.reset()
    yield
    booking_tool.reset()


@pytest.fixture
def state_machine():
    return WizardStateMachine()


@pytest.fixture
def cart():
    return ServiceCart()


@pytest.fixture
def configurator():
    return ScheduleConfigurator()


class RecordingNotifier:
    """Captures toast messages instead of displaying them."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.failures: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def failure(self, message: str) -> None:
        self.failures.append(message)


class RecordingNavigator:
    def __init__(self) -> None:
        self.receipts: list[BookingResult] = []

    def to_receipt(self, result: BookingResult) -> None:
        self.receipts.append(result)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def navigator():
    return RecordingNavigator()


def make_service(
    service_id: str = "svc-1",
    price: Optional[float] = 1000,
    name: str = "Wound Care & Dressing",
    short_description: str = "Professional wound cleaning",
) -> Service:
    """Helper to create a Service with sensible defaults."""
    return Service(
        id=service_id,
        name=name,
        short_description=short_description,
        price=price,
        duration="30 minutes",
        category=ServiceCategory.NURSING,
    )


def make_practitioner(
    availability: tuple = ("9am-5pm",),
    practitioner_id: str = "nurse-1",
    rating: Optional[float] = 4.5,
) -> Practitioner:
    """Helper to create a Practitioner with the given availability entries."""
    return Practitioner(
        id=practitioner_id,
        user_id=f"user-{practitioner_id}",
        name="Adaeze Okafor",
        specialization="Wound Care",
        rating=rating,
        availability=availability,
    )


def make_wizard(submit_fn=None, notifier=None, navigator=None) -> BookingWizard:
    """Helper to create a wizard over the mock catalog and directory."""
    return BookingWizard(
        get_all_services(),
        get_all_practitioners(),
        submit_fn=submit_fn or booking_tool.submit_booking,
        notifier=notifier,
        navigator=navigator,
    )


def wizard_at_booking_stage(submit_fn=None, notifier=None, navigator=None) -> BookingWizard:
    """Helper that walks a wizard through every stage up to the finalizer."""
    wizard = make_wizard(submit_fn, notifier, navigator)
    wizard.toggle_service("np-001")
    assert wizard.advance() == []
    wizard.select_practitioner("nurse-001")
    assert wizard.advance() == []
    wizard.set_start_date(TOMORROW)
    assert wizard.advance() == []
    wizard.select_time("10:00")
    assert wizard.advance() == []
    return wizard


async def succeed(payload: BookingPayload) -> BookingResult:
    return BookingResult(success=True, booking_ref="TM-TEST01", message="Booked")

