"""
Time selection and best-effort availability validation.

Practitioner availability is free text in the directory, so validation
degrades gracefully: entries that cannot be parsed simply do not match,
a practitioner with no availability accepts any time, and a mismatch is
a warning for the patient rather than a hard block.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from toltimed.schemas.practitioner_schema import DateSlots, Practitioner
from toltimed.wizard.schedule import ScheduleConfigurator

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_TWELVE_HOUR = r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)"
_RANGE_RE = re.compile(rf"^\s*{_TWELVE_HOUR}\s*-\s*{_TWELVE_HOUR}\s*$", re.IGNORECASE)
_TWELVE_HOUR_RE = re.compile(rf"^\s*{_TWELVE_HOUR}\s*$", re.IGNORECASE)
_TWENTY_FOUR_HOUR_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


@dataclass(frozen=True)
class ParsedRange:
    """An availability window in minutes since midnight, inclusive."""
    start: int
    end: int

    def contains(self, minutes: int) -> bool:
        return self.start <= minutes <= self.end


@dataclass(frozen=True)
class Unparsed:
    """An availability string the grammar could not read."""
    text: str


RangeParse = Union[ParsedRange, Unparsed]


@dataclass(frozen=True)
class AvailabilityCheck:
    """Result of checking a time against a practitioner's availability."""
    valid: bool
    error: Optional[str] = None


def _twelve_hour_to_minutes(hour: str, minute: Optional[str], meridiem: str) -> Optional[int]:
    h = int(hour)
    m = int(minute) if minute else 0
    if not 1 <= h <= 12 or not 0 <= m < 60:
        return None
    h %= 12
    if meridiem.lower() == "pm":
        h += 12
    return h * 60 + m


def parse_availability_range(text: str) -> RangeParse:
    """Parse ``"9am-5pm"`` style text into minutes since midnight.

    12am is midnight (0) and 12pm is noon (720). Anything else is Unparsed.
    """
    match = _RANGE_RE.match(text)
    if not match:
        return Unparsed(text)
    start = _twelve_hour_to_minutes(*match.group(1, 2, 3))
    end = _twelve_hour_to_minutes(*match.group(4, 5, 6))
    if start is None or end is None:
        return Unparsed(text)
    return ParsedRange(start=start, end=end)


def parse_clock_time(value: str) -> Optional[int]:
    """Minutes since midnight for ``"14:30"`` or ``"2:30pm"``; None if unreadable."""
    match = _TWENTY_FOUR_HOUR_RE.match(value)
    if match:
        h, m = int(match.group(1)), int(match.group(2))
        if 0 <= h < 24 and 0 <= m < 60:
            return h * 60 + m
        return None
    match = _TWELVE_HOUR_RE.match(value)
    if match:
        return _twelve_hour_to_minutes(*match.group(1, 2, 3))
    return None


def _entry_accepts(entry: Union[DateSlots, str], minutes: int) -> bool:
    if isinstance(entry, DateSlots):
        return any(parse_clock_time(slot) == minutes for slot in entry.slots)
    parsed = parse_availability_range(entry)
    if isinstance(parsed, Unparsed):
        logger.debug("Ignoring unparseable availability entry '%s'", entry)
        return False
    return parsed.contains(minutes)


def validate_time(selected_time: str, practitioner: Practitioner) -> AvailabilityCheck:
    """
    Check a chosen time against every availability entry of a practitioner.

    Returns:
        AvailabilityCheck with valid=True if any entry accepts the time,
        or if the practitioner declares no availability at all. On a
        mismatch the error lists each declared entry verbatim.
    """
    if not practitioner.availability:
        return AvailabilityCheck(valid=True)

    minutes = parse_clock_time(selected_time)
    if minutes is not None and any(
        _entry_accepts(entry, minutes) for entry in practitioner.availability
    ):
        return AvailabilityCheck(valid=True)

    declared = ", ".join(practitioner.availability_labels())
    logger.debug("Time '%s' outside availability of %s", selected_time, practitioner.id)
    return AvailabilityCheck(
        valid=False,
        error=(
            f"{practitioner.name} may not be available at {selected_time}. "
            f"Available: {declared}"
        ),
    )


def available_slots(practitioner: Practitioner) -> list[str]:
    """Discrete slots offered as quick picks: those of the first dated entry."""
    for entry in practitioner.availability:
        if isinstance(entry, DateSlots):
            return list(entry.slots)
    return []


class TimeSelector:
    """Scheduling-stage view over the time slot stored in the schedule."""

    def __init__(self, configurator: ScheduleConfigurator) -> None:
        self._configurator = configurator

    @property
    def time_slot(self) -> str:
        return self._configurator.config.time_slot

    def select(self, time_slot: str) -> None:
        self._configurator.set_time_slot(time_slot)

    def check(self, practitioner: Optional[Practitioner]) -> AvailabilityCheck:
        if not self.time_slot:
            return AvailabilityCheck(valid=False, error="Select a time slot.")
        if practitioner is None:
            return AvailabilityCheck(valid=True)
        return validate_time(self.time_slot, practitioner)

    def can_continue(self) -> bool:
        # Availability mismatches only warn; a dispatcher confirms the slot.
        return bool(self.time_slot)
