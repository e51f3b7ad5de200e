"""Service catalog and cart line data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ServiceCategory(str, Enum):
    """Department a service belongs to."""
    NURSING = "nursing"
    CAREGIVER = "caregiver"
    INPATIENT = "inpatient"


class Service(BaseModel):
    """An offered procedure or care package. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    short_description: str = ""
    price: Optional[float] = Field(default=None, ge=0)
    duration: str = ""
    category: ServiceCategory = ServiceCategory.NURSING
    features: tuple[str, ...] = ()
    requirements: tuple[str, ...] = ()


class SelectedService(BaseModel):
    """A cart line: a selected service with its quantity and day multipliers."""

    service: Service
    quantity: int = Field(default=1, ge=1)
    days: int = Field(default=1, ge=1)

    @property
    def total_amount(self) -> float:
        return (self.service.price or 0) * self.quantity * self.days
