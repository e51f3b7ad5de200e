"""
Booking wizard: the single owner of all wizard state.

Stage components never talk to each other. The wizard holds the cart,
the chosen practitioner, the schedule, and the patient form, gates each
forward move, and hands the host immutable ``WizardSnapshot`` objects to
render. Going back never clears anything, so returning to a later stage
shows what was entered before.

Usage:
    wizard = BookingWizard(services, practitioners, submit_fn=submit_booking)
    wizard.toggle_service("np-001")
    wizard.advance()
    ...
    result = await wizard.submit()
"""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from toltimed.errors import IncompleteBookingError, SubmissionNotAllowedError
from toltimed.logging_context import get_booking_logger, set_booking_id
from toltimed.schemas.booking_schema import (
    BookingDetails,
    BookingPayload,
    BookingResult,
    BookingSubject,
    ScheduleConfig,
    ScheduleFrequency,
    Weekday,
)
from toltimed.schemas.catalog_schema import SelectedService, Service
from toltimed.schemas.practitioner_schema import Practitioner
from toltimed.tools.practitioners import search_practitioners
from toltimed.tools.services import filter_services
from toltimed.wizard.availability import AvailabilityCheck, TimeSelector, available_slots
from toltimed.wizard.cart import ServiceCart
from toltimed.wizard.finalizer import (
    BookingFinalizer,
    FinalizerState,
    Navigator,
    Notifier,
    SubmitFn,
)
from toltimed.wizard.schedule import ScheduleConfigurator
from toltimed.wizard.state_machine import WizardStage, WizardStateMachine, WizardTrigger

logger = get_booking_logger(__name__)

_FORWARD_TRIGGERS: dict[WizardStage, WizardTrigger] = {
    WizardStage.SERVICE_SELECTION: WizardTrigger.SERVICES_CONFIRMED,
    WizardStage.PRACTITIONERS: WizardTrigger.PRACTITIONER_SELECTED,
    WizardStage.SCHEDULE_CONFIG: WizardTrigger.SCHEDULE_CONFIRMED,
    WizardStage.SCHEDULING: WizardTrigger.TIME_CONFIRMED,
}


@dataclass(frozen=True)
class WizardSnapshot:
    """Read-only view of the wizard for rendering one stage."""
    stage: WizardStage
    title: str
    description: str
    cart_lines: tuple[SelectedService, ...]
    cart_total: float
    practitioner: Optional[Practitioner]
    schedule: ScheduleConfig
    schedule_description: str
    multiplier: int
    total_cost: float
    available_slots: tuple[str, ...]
    time_check: AvailabilityCheck
    booking_for_self: Optional[bool]
    details: BookingDetails
    finalizer_state: FinalizerState
    stage_errors: tuple[str, ...]
    can_go_back: bool
    last_result: Optional[BookingResult]


class BookingWizard:
    """Owns the wizard's state machine and every stage's data."""

    def __init__(
        self,
        services: Iterable[Service],
        practitioners: Iterable[Practitioner],
        submit_fn: SubmitFn,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        booking_id: Optional[str] = None,
    ) -> None:
        self._services = list(services)
        self._practitioners = list(practitioners)
        self._sm = WizardStateMachine()
        self._cart = ServiceCart()
        self._schedule = ScheduleConfigurator()
        self._time = TimeSelector(self._schedule)
        self._finalizer = BookingFinalizer(submit_fn, notifier, navigator)
        self._practitioner: Optional[Practitioner] = None
        self._latitude = latitude
        self._longitude = longitude
        self.booking_id = booking_id or f"WIZ-{uuid.uuid4().hex[:8]}"
        set_booking_id(self.booking_id)

    @property
    def stage(self) -> WizardStage:
        return self._sm.current_stage

    @property
    def practitioner(self) -> Optional[Practitioner]:
        return self._practitioner

    def get_state_trace(self) -> list[str]:
        return self._sm.get_state_trace()

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def _find_service(self, service_id: str) -> Service:
        for service in self._services:
            if service.id == service_id:
                return service
        raise ValueError(f"Unknown service: {service_id}")

    def _find_practitioner(self, practitioner_id: str) -> Practitioner:
        for practitioner in self._practitioners:
            if practitioner.id == practitioner_id:
                return practitioner
        raise ValueError(f"Unknown practitioner: {practitioner_id}")

    def search_services(self, term: str) -> list[Service]:
        return filter_services(self._services, term)

    def search_practitioners(self, term: str) -> list[Practitioner]:
        return search_practitioners(self._practitioners, term)

    # ------------------------------------------------------------------ #
    # Stage updates
    # ------------------------------------------------------------------ #

    def toggle_service(self, service: Union[Service, str]) -> bool:
        if isinstance(service, str):
            service = self._find_service(service)
        return self._cart.toggle_select(service)

    def adjust_service(
        self, service_id: str, dimension: str, increment: bool
    ) -> Optional[SelectedService]:
        return self._cart.adjust_quantity(service_id, dimension, increment)

    def select_practitioner(self, practitioner: Union[Practitioner, str]) -> Practitioner:
        if isinstance(practitioner, str):
            practitioner = self._find_practitioner(practitioner)
        self._practitioner = practitioner
        logger.debug("Practitioner selected: %s", practitioner.id)
        return practitioner

    def set_frequency(self, frequency: ScheduleFrequency) -> ScheduleConfig:
        return self._schedule.set_frequency(frequency)

    def toggle_day(self, day: Weekday) -> ScheduleConfig:
        return self._schedule.toggle_day(day)

    def set_start_date(self, start_date: date) -> ScheduleConfig:
        return self._schedule.set_start_date(start_date)

    def set_total_days(self, total_days: int) -> ScheduleConfig:
        return self._schedule.set_total_days(total_days)

    def select_time(self, time_slot: str) -> AvailabilityCheck:
        """Record the time and return the availability warning, if any."""
        self._time.select(time_slot)
        return self._time.check(self._practitioner)

    def choose_subject(self, for_self: bool) -> None:
        self._finalizer.choose_subject(for_self)

    def update_details(self, **fields: str) -> BookingDetails:
        return self._finalizer.update_details(**fields)

    # ------------------------------------------------------------------ #
    # Navigation
    # ------------------------------------------------------------------ #

    def stage_errors(self, today: Optional[date] = None) -> list[str]:
        """Reasons the current stage cannot be confirmed yet."""
        stage = self._sm.current_stage
        if stage == WizardStage.SERVICE_SELECTION:
            return [] if self._cart.total_services() else ["Select at least one service."]
        if stage == WizardStage.PRACTITIONERS:
            return [] if self._practitioner else ["Choose a healthcare provider."]
        if stage == WizardStage.SCHEDULE_CONFIG:
            return self._schedule.validation_errors(today)
        if stage == WizardStage.SCHEDULING:
            return [] if self._time.can_continue() else ["Select a time slot."]
        if stage == WizardStage.BOOKING:
            if self._finalizer.booking_for_self is None:
                return ["Choose who this appointment is for."]
            return [f"{name.replace('_', ' ').capitalize()} is required."
                    for name in self._finalizer.missing_fields()]
        return []

    def advance(self, today: Optional[date] = None) -> list[str]:
        """
        Confirm the current stage and move forward.

        Returns:
            Empty list on success, otherwise the validation messages that
            kept the wizard on its current stage.
        """
        stage = self._sm.current_stage
        if stage not in _FORWARD_TRIGGERS:
            return ["Use submit to complete the booking."] if stage == WizardStage.BOOKING else []

        errors = self.stage_errors(today)
        if errors:
            logger.debug("Stage %s blocked: %s", stage.value, errors)
            return errors

        if stage == WizardStage.SERVICE_SELECTION:
            first = self._cart.first_line()
            if first is not None:
                self._schedule.set_total_days(first.days)

        self._sm.transition(_FORWARD_TRIGGERS[stage])
        return []

    def back(self) -> WizardStage:
        """Step back one stage, keeping everything entered so far."""
        return self._sm.transition(WizardTrigger.BACK)

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    def booked_service(self) -> Optional[Service]:
        first = self._cart.first_line()
        return first.service if first else None

    def build_payload(self, subject: Optional[BookingSubject] = None) -> BookingPayload:
        """Compose the submission payload.

        Raises:
            IncompleteBookingError: If a service, practitioner, schedule,
                time slot, or valid patient form is missing.
        """
        service = self.booked_service()
        if service is None:
            raise IncompleteBookingError("No service selected")
        if self._practitioner is None:
            raise IncompleteBookingError("No practitioner selected")
        schedule_errors = self._schedule.validation_errors()
        if schedule_errors:
            raise IncompleteBookingError(" ".join(schedule_errors))
        if not self._time.can_continue():
            raise IncompleteBookingError("No time slot selected")
        if subject is None:
            subject = self._finalizer.to_subject()
        return BookingPayload(
            service=service,
            practitioner=self._practitioner,
            schedule_config=self._schedule.config,
            subject=subject,
            latitude=self._latitude,
            longitude=self._longitude,
        )

    def is_submit_disabled(self, external_loading: bool = False) -> bool:
        if self._sm.current_stage != WizardStage.BOOKING:
            return True
        return self._finalizer.is_submit_disabled(external_loading)

    async def submit(self) -> BookingResult:
        """Submit from the booking stage; a success moves the wizard to submitted.

        Raises:
            SubmissionNotAllowedError: Outside the booking stage, or when
                the finalizer refuses (invalid form, already in flight).
        """
        if self._sm.current_stage != WizardStage.BOOKING:
            raise SubmissionNotAllowedError(
                f"Cannot submit from stage '{self._sm.current_stage.value}'"
            )
        set_booking_id(self.booking_id)
        result = await self._finalizer.submit(self.build_payload)
        if result.success:
            self._sm.transition(WizardTrigger.BOOKING_SUBMITTED)
        return result

    # ------------------------------------------------------------------ #
    # Snapshot
    # ------------------------------------------------------------------ #

    def snapshot(self, today: Optional[date] = None) -> WizardSnapshot:
        service = self.booked_service()
        price = (service.price or 0) if service else 0
        practitioner = self._practitioner
        return WizardSnapshot(
            stage=self._sm.current_stage,
            title=self._sm.title,
            description=self._sm.description,
            cart_lines=self._cart.lines,
            cart_total=self._cart.cart_total(),
            practitioner=practitioner,
            schedule=self._schedule.config,
            schedule_description=self._schedule.description(),
            multiplier=self._schedule.multiplier(),
            total_cost=self._schedule.cost(price),
            available_slots=tuple(available_slots(practitioner)) if practitioner else (),
            time_check=self._time.check(practitioner),
            booking_for_self=self._finalizer.booking_for_self,
            details=self._finalizer.details,
            finalizer_state=self._finalizer.state,
            stage_errors=tuple(self.stage_errors(today)),
            can_go_back=self._sm.can_go_back(),
            last_result=self._finalizer.last_result,
        )
