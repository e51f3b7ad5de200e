"""
Schedule configuration: session multiplier, cost, and description.

The multiplier is the number of billable sessions a frequency implies
over the care program:

    daily            -> total_days
    specific-days    -> ceil(total_days / 7) * len(selected_days)
    every-other-day  -> ceil(total_days / 2)
    weekly           -> ceil(total_days / 7)

All three functions are pure, so recomputing with unchanged inputs
always gives the same answer.
"""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from toltimed.schemas.booking_schema import ScheduleConfig, ScheduleFrequency, Weekday

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def session_multiplier(
    frequency: ScheduleFrequency,
    total_days: int,
    selected_days: Iterable[Weekday] = (),
) -> int:
    """Number of billable sessions for a frequency over ``total_days``."""
    if total_days < 0:
        raise ValueError(f"total_days must be >= 0, got {total_days}")

    if frequency == ScheduleFrequency.DAILY:
        return total_days
    if frequency == ScheduleFrequency.SPECIFIC_DAYS:
        return math.ceil(total_days / DAYS_PER_WEEK) * len(tuple(selected_days))
    if frequency == ScheduleFrequency.EVERY_OTHER_DAY:
        return math.ceil(total_days / 2)
    if frequency == ScheduleFrequency.WEEKLY:
        return math.ceil(total_days / DAYS_PER_WEEK)
    raise ValueError(f"Unknown frequency: {frequency!r}")


def total_cost(price: float, config: ScheduleConfig) -> float:
    """Per-session price times the number of sessions in the schedule."""
    return price * session_multiplier(config.frequency, config.total_days, config.selected_days)


def schedule_description(config: ScheduleConfig) -> str:
    """Human-readable summary of the schedule."""
    n = config.total_days
    if config.frequency == ScheduleFrequency.DAILY:
        return f"Daily appointments for {n} days"
    if config.frequency == ScheduleFrequency.SPECIFIC_DAYS:
        days = ", ".join(day.value for day in config.selected_days)
        return f"{days} each week for {n} days"
    if config.frequency == ScheduleFrequency.EVERY_OTHER_DAY:
        return f"Every other day for {n} days"
    if config.frequency == ScheduleFrequency.WEEKLY:
        return f"Weekly appointments for {n} days"
    return ""


class ScheduleConfigurator:
    """
    Holds the wizard's schedule and applies stage-three edits.

    Each edit replaces the immutable ``ScheduleConfig`` with a validated
    copy, so callers can hold on to earlier snapshots safely.
    """

    def __init__(self, config: Optional[ScheduleConfig] = None) -> None:
        self._config = config or ScheduleConfig()

    @property
    def config(self) -> ScheduleConfig:
        return self._config

    def _update(self, **changes) -> ScheduleConfig:
        self._config = ScheduleConfig(**{**self._config.model_dump(), **changes})
        return self._config

    def set_frequency(self, frequency: ScheduleFrequency) -> ScheduleConfig:
        """Change frequency; weekday picks are dropped unless staying on specific-days."""
        frequency = ScheduleFrequency(frequency)
        if frequency == ScheduleFrequency.SPECIFIC_DAYS:
            return self._update(frequency=frequency)
        return self._update(frequency=frequency, selected_days=())

    def toggle_day(self, day: Weekday) -> ScheduleConfig:
        """Select or deselect a weekday. Only valid for specific-days schedules."""
        day = Weekday(day)
        if self._config.frequency != ScheduleFrequency.SPECIFIC_DAYS:
            raise ValueError("Weekdays can only be chosen for a specific-days schedule")
        days = self._config.selected_days
        if day in days:
            days = tuple(d for d in days if d != day)
        else:
            days = days + (day,)
        return self._update(selected_days=days)

    def set_start_date(self, start_date: date) -> ScheduleConfig:
        return self._update(start_date=start_date)

    def set_total_days(self, total_days: int) -> ScheduleConfig:
        return self._update(total_days=total_days)

    def set_time_slot(self, time_slot: str) -> ScheduleConfig:
        return self._update(time_slot=time_slot.strip())

    def multiplier(self) -> int:
        c = self._config
        return session_multiplier(c.frequency, c.total_days, c.selected_days)

    def cost(self, price: float) -> float:
        return total_cost(price, self._config)

    def description(self) -> str:
        return schedule_description(self._config)

    def validation_errors(self, today: Optional[date] = None) -> list[str]:
        """Reasons the schedule stage cannot be confirmed yet."""
        today = today or date.today()
        c = self._config
        errors = []
        if c.start_date is None:
            errors.append("Choose a start date.")
        elif c.start_date < today:
            errors.append("Start date cannot be in the past.")
        if c.frequency == ScheduleFrequency.SPECIFIC_DAYS and not c.selected_days:
            errors.append("Select at least one day of the week.")
        if c.total_days < 1:
            errors.append("The care program must last at least one day.")
        return errors

    def can_continue(self, today: Optional[date] = None) -> bool:
        return not self.validation_errors(today)
