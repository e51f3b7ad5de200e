"""
Finite state machine for the booking wizard's stage flow.

Stages advance one at a time on explicit confirmation and can step back
one stage at a time. Every move is an explicit transition in the table
below; anything else is rejected.

Usage:
    sm = WizardStateMachine()
    sm.transition(WizardTrigger.SERVICES_CONFIRMED)
    assert sm.current_stage == WizardStage.PRACTITIONERS
"""

import logging
from enum import Enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from toltimed.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class WizardStage(str, Enum):
    """All stages of the booking wizard."""
    SERVICE_SELECTION = "service_selection"
    PRACTITIONERS = "practitioners"
    SCHEDULE_CONFIG = "schedule_config"
    SCHEDULING = "scheduling"
    BOOKING = "booking"
    SUBMITTED = "submitted"


class WizardTrigger(str, Enum):
    """Events that cause stage transitions."""
    SERVICES_CONFIRMED = "services_confirmed"
    PRACTITIONER_SELECTED = "practitioner_selected"
    SCHEDULE_CONFIRMED = "schedule_confirmed"
    TIME_CONFIRMED = "time_confirmed"
    BOOKING_SUBMITTED = "booking_submitted"
    BACK = "back"


STAGE_TITLES: dict[WizardStage, tuple[str, str]] = {
    WizardStage.SERVICE_SELECTION: ("Select Services", "Choose the procedures you need"),
    WizardStage.PRACTITIONERS: (
        "Available Healthcare Providers",
        "Select from our verified healthcare providers",
    ),
    WizardStage.SCHEDULE_CONFIG: (
        "Configure Schedule",
        "Configure your appointment frequency and timing",
    ),
    WizardStage.SCHEDULING: ("Select Time", "Choose your preferred time slot"),
    WizardStage.BOOKING: (
        "Complete Booking",
        "Provide booking details to confirm your appointment(s)",
    ),
    WizardStage.SUBMITTED: ("Booking Confirmed", "Your appointment request has been received"),
}


@dataclass
class Transition:
    """A single valid stage transition."""
    from_stage: WizardStage
    to_stage: WizardStage
    trigger: WizardTrigger


@dataclass
class StageEntry:
    """Recorded history entry for a stage visit."""
    stage: WizardStage
    entered_at: datetime
    trigger: Optional[WizardTrigger] = None


class WizardStateMachine:
    """
    Deterministic stage controller for the booking wizard.

    Forward moves are gated by the owning wizard before it fires a
    trigger, so the table stays free of form data.
    """

    TRANSITIONS: list[Transition] = [
        # --- Forward ---
        Transition(WizardStage.SERVICE_SELECTION, WizardStage.PRACTITIONERS,
                   WizardTrigger.SERVICES_CONFIRMED),
        Transition(WizardStage.PRACTITIONERS, WizardStage.SCHEDULE_CONFIG,
                   WizardTrigger.PRACTITIONER_SELECTED),
        Transition(WizardStage.SCHEDULE_CONFIG, WizardStage.SCHEDULING,
                   WizardTrigger.SCHEDULE_CONFIRMED),
        Transition(WizardStage.SCHEDULING, WizardStage.BOOKING,
                   WizardTrigger.TIME_CONFIRMED),
        Transition(WizardStage.BOOKING, WizardStage.SUBMITTED,
                   WizardTrigger.BOOKING_SUBMITTED),

        # --- Back ---
        Transition(WizardStage.PRACTITIONERS, WizardStage.SERVICE_SELECTION,
                   WizardTrigger.BACK),
        Transition(WizardStage.SCHEDULE_CONFIG, WizardStage.PRACTITIONERS,
                   WizardTrigger.BACK),
        Transition(WizardStage.SCHEDULING, WizardStage.SCHEDULE_CONFIG,
                   WizardTrigger.BACK),
        Transition(WizardStage.BOOKING, WizardStage.SCHEDULING,
                   WizardTrigger.BACK),
    ]

    def __init__(self, initial: WizardStage = WizardStage.SERVICE_SELECTION) -> None:
        self._current_stage = initial
        self._history: list[StageEntry] = [
            StageEntry(stage=initial, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_stage(self) -> WizardStage:
        return self._current_stage

    def transition(self, trigger: WizardTrigger) -> WizardStage:
        """
        Execute a stage transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new wizard stage.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_stage == self._current_stage and t.trigger == trigger:
                old_stage = self._current_stage
                self._current_stage = t.to_stage
                self._history.append(StageEntry(
                    stage=self._current_stage,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                logger.debug(
                    "Stage transition: %s -> %s (trigger: %s)",
                    old_stage.value, self._current_stage.value, trigger.value,
                )
                return self._current_stage

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_stage.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[WizardTrigger]:
        """Return all triggers valid from the current stage."""
        return [t.trigger for t in self.TRANSITIONS if t.from_stage == self._current_stage]

    def get_history(self) -> list[StageEntry]:
        """Return the full stage transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of stage names visited."""
        return [entry.stage.value for entry in self._history]

    def can_go_back(self) -> bool:
        return WizardTrigger.BACK in self.get_valid_triggers()

    def is_terminal(self) -> bool:
        return self._current_stage == WizardStage.SUBMITTED

    @property
    def title(self) -> str:
        return STAGE_TITLES[self._current_stage][0]

    @property
    def description(self) -> str:
        return STAGE_TITLES[self._current_stage][1]
