"""Practitioner and availability data models."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DateSlots(BaseModel):
    """Discrete bookable times on a single date."""

    model_config = ConfigDict(frozen=True)

    date: str
    slots: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.date}: {', '.join(self.slots)}"


# Free-text entries look like "9am-5pm" and are parsed at validation time.
AvailabilityEntry = Union[DateSlots, str]


class Review(BaseModel):
    """A patient review shown on the practitioner card."""
    id: str
    reviewer_name: str
    rating: float = Field(ge=0, le=5)
    comment: str = ""
    date: str = ""


class Practitioner(BaseModel):
    """A care provider. Read-only input to the wizard."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str = ""
    name: str
    specialization: Union[str, list[str], None] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    experience: str = ""
    services: tuple[str, ...] = ()
    availability: tuple[AvailabilityEntry, ...] = ()
    latest_reviews: tuple[Review, ...] = ()

    @property
    def rating_display(self) -> str:
        """Rating for display; absence renders as N/A, never as zero."""
        if self.rating is None:
            return "N/A"
        return f"{self.rating:.1f}"

    @property
    def specializations(self) -> list[str]:
        if self.specialization is None:
            return []
        if isinstance(self.specialization, str):
            return [self.specialization]
        return list(self.specialization)

    def availability_labels(self) -> list[str]:
        """Every declared availability entry rendered verbatim."""
        return [str(entry) for entry in self.availability]
