from toltimed.wizard.availability import TimeSelector, parse_availability_range, validate_time
from toltimed.wizard.booking_wizard import BookingWizard, WizardSnapshot
from toltimed.wizard.cart import ServiceCart
from toltimed.wizard.finalizer import BookingFinalizer, FinalizerState
from toltimed.wizard.schedule import (
    ScheduleConfigurator,
    schedule_description,
    session_multiplier,
    total_cost,
)
from toltimed.wizard.state_machine import WizardStage, WizardStateMachine, WizardTrigger

__all__ = [
    "BookingWizard",
    "WizardSnapshot",
    "WizardStateMachine",
    "WizardStage",
    "WizardTrigger",
    "ServiceCart",
    "ScheduleConfigurator",
    "session_multiplier",
    "total_cost",
    "schedule_description",
    "TimeSelector",
    "parse_availability_range",
    "validate_time",
    "BookingFinalizer",
    "FinalizerState",
]
