"""Schedule, patient identity, and submission data models."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from toltimed.config import settings
from toltimed.schemas.catalog_schema import Service
from toltimed.schemas.practitioner_schema import Practitioner


class ScheduleFrequency(str, Enum):
    """How often sessions recur over the care program."""
    DAILY = "daily"
    SPECIFIC_DAYS = "specific-days"
    EVERY_OTHER_DAY = "every-other-day"
    WEEKLY = "weekly"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class ScheduleConfig(BaseModel):
    """Recurrence, start date, and time slot captured by the wizard."""

    model_config = ConfigDict(frozen=True)

    frequency: ScheduleFrequency = ScheduleFrequency.DAILY
    selected_days: tuple[Weekday, ...] = ()
    start_date: Optional[date] = None
    time_slot: str = ""
    total_days: int = Field(default_factory=lambda: settings.wizard.default_total_days, ge=0)

    @model_validator(mode="after")
    def _days_only_for_specific_days(self) -> "ScheduleConfig":
        if self.selected_days and self.frequency != ScheduleFrequency.SPECIFIC_DAYS:
            raise ValueError("selected_days is only allowed with frequency 'specific-days'")
        if len(set(self.selected_days)) != len(self.selected_days):
            raise ValueError("selected_days must not repeat a weekday")
        return self


class BookingDetails(BaseModel):
    """Flat form buffer edited by the finalizer before it becomes a subject."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    relationship: str = ""
    test_result: Optional[str] = None


class SelfSubject(BaseModel):
    """Booking for the account holder: only the service address is needed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["self"] = "self"
    address: str = Field(min_length=1)
    test_result: Optional[str] = None


class OtherSubject(BaseModel):
    """Booking for a family member or friend."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["other"] = "other"
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    relationship: str = Field(min_length=1)


BookingSubject = Union[SelfSubject, OtherSubject]


class BookingPayload(BaseModel):
    """Everything the submission endpoint receives for one booking."""

    model_config = ConfigDict(frozen=True)

    service: Service
    practitioner: Practitioner
    schedule_config: ScheduleConfig
    subject: BookingSubject = Field(discriminator="kind")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def booking_for_self(self) -> bool:
        return isinstance(self.subject, SelfSubject)

    def to_wire(self) -> dict[str, Any]:
        """Render the request body expected by the nurse procedure bookings endpoint."""
        nurse = self.practitioner.user_id or self.practitioner.id
        config = self.schedule_config
        patient_detail: Optional[dict[str, str]] = None
        if isinstance(self.subject, OtherSubject):
            patient_detail = {
                "first_name": self.subject.first_name,
                "last_name": self.subject.last_name,
                "email": self.subject.email,
                "phone_number": self.subject.phone,
                "address": self.subject.address,
                "relationship_to_patient": self.subject.relationship,
            }
        return {
            "nurse": nurse,
            "nurse_id": nurse,
            "scheduling_option": config.frequency.value,
            "start_date": config.start_date.isoformat() if config.start_date else "",
            "time_of_day": config.time_slot,
            "selected_days": [day.value.capitalize() for day in config.selected_days],
            "is_for_self": self.booking_for_self,
            "procedure_item": {
                "procedure_id": self.service.id,
                "num_days": config.total_days,
            },
            "patient_detail": patient_detail,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "service_address": self.subject.address,
        }


class BookingResult(BaseModel):
    """Outcome reported by the submission endpoint."""
    success: bool
    booking_ref: Optional[str] = None
    message: str = ""
    total_cost: Optional[float] = None
    created_at: Optional[datetime] = None
