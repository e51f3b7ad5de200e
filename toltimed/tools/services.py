"""
Mock service catalog with nursing, caregiver, and in-patient procedures.

In production, this list would come from the procedures API. The wizard
only filters and selects over whatever list it is handed.
"""

import logging
from typing import Optional

from toltimed.schemas.catalog_schema import Service, ServiceCategory

logger = logging.getLogger(__name__)

SERVICE_CATALOG: list[Service] = [
    Service(
        id="np-001",
        name="Wound Care & Dressing",
        short_description="Professional wound cleaning, dressing, and monitoring",
        description=(
            "Complete wound care service including cleaning, antiseptic application, "
            "proper dressing, and healing progress monitoring."
        ),
        price=3500,
        duration="30-45 minutes",
        category=ServiceCategory.NURSING,
        features=(
            "Sterile wound cleaning",
            "Antiseptic application",
            "Professional dressing",
            "Healing progress monitoring",
        ),
        requirements=("Medical history", "Previous dressing materials (if any)"),
    ),
    Service(
        id="np-002",
        name="Injection Administration",
        short_description="Safe administration of prescribed medications via injection",
        description=(
            "Professional administration of intramuscular, subcutaneous, and "
            "intravenous injections as prescribed by your doctor."
        ),
        price=2000,
        duration="15-20 minutes",
        category=ServiceCategory.NURSING,
        features=("IM/SC/IV injections", "Medication verification", "Safe needle disposal"),
        requirements=("Doctor's prescription", "Medication to be administered"),
    ),
    Service(
        id="np-003",
        name="Vital Signs Monitoring",
        short_description="Regular monitoring of blood pressure, temperature, pulse",
        description=(
            "Comprehensive vital signs assessment including blood pressure, "
            "temperature, pulse rate, respiratory rate, and oxygen saturation."
        ),
        price=1500,
        duration="20-30 minutes",
        category=ServiceCategory.NURSING,
        features=("Blood pressure check", "Temperature monitoring", "Detailed health report"),
    ),
    Service(
        id="cg-001",
        name="Elderly Companion Care",
        short_description="Daily living support and companionship at home",
        description="Help with bathing, meals, mobility, and medication reminders.",
        price=8000,
        duration="8 hours",
        category=ServiceCategory.CAREGIVER,
        features=("Personal hygiene support", "Meal preparation", "Medication reminders"),
    ),
    Service(
        id="ip-001",
        name="Post-Surgery Bedside Care",
        short_description="Bedside nursing for patients recovering in hospital",
        description="Round-the-clock bedside monitoring and assistance after surgery.",
        price=12000,
        duration="12 hours",
        category=ServiceCategory.INPATIENT,
        features=("Bedside monitoring", "Drain and catheter care", "Mobility assistance"),
    ),
]


def get_all_services(category: Optional[ServiceCategory] = None) -> list[Service]:
    """Return catalog services in display order, optionally for one department."""
    if category is None:
        return list(SERVICE_CATALOG)
    return [s for s in SERVICE_CATALOG if s.category == category]


def get_service(service_id: str) -> Optional[Service]:
    """Get a service by its identifier."""
    for service in SERVICE_CATALOG:
        if service.id == service_id:
            return service
    return None


def filter_services(services: list[Service], term: str) -> list[Service]:
    """Case-insensitive substring match against name and short description.

    Pure: the input list is never modified and order is preserved.
    """
    needle = term.lower().strip()
    if not needle:
        return list(services)
    matches = [
        s
        for s in services
        if needle in s.name.lower() or needle in s.short_description.lower()
    ]
    logger.debug("Service search '%s' matched %d of %d", term, len(matches), len(services))
    return matches
