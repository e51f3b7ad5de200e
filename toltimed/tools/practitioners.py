"""
Mock practitioner directory.

In production, this would call the nearby-nurses endpoint with the
patient's coordinates. The wizard treats the result as read-only input.
"""

import logging
from typing import Optional

from toltimed.schemas.practitioner_schema import DateSlots, Practitioner, Review

logger = logging.getLogger(__name__)

PRACTITIONERS: list[Practitioner] = [
    Practitioner(
        id="nurse-001",
        user_id="3f1c9a52",
        name="Adaeze Okafor",
        specialization=["Wound Care", "Geriatric Nursing"],
        rating=4.8,
        experience="9 years",
        services=("Wound Care & Dressing", "Vital Signs Monitoring"),
        availability=("9am-5pm",),
        latest_reviews=(
            Review(id="rv-1", reviewer_name="Tunde A.", rating=5, comment="Very gentle."),
        ),
    ),
    Practitioner(
        id="nurse-002",
        user_id="8b2e4d17",
        name="Ibrahim Musa",
        specialization="Critical Care",
        rating=4.5,
        experience="6 years",
        services=("Injection Administration", "Post-Surgery Bedside Care"),
        availability=(
            DateSlots(date="2026-10-20", slots=("08:00", "10:00", "14:00")),
            "6pm-10pm",
        ),
    ),
    Practitioner(
        id="nurse-003",
        user_id="c71d0e93",
        name="Grace Eze",
        specialization=None,
        rating=None,
        experience="2 years",
        services=("Elderly Companion Care",),
        availability=(),
    ),
]


def get_all_practitioners() -> list[Practitioner]:
    return list(PRACTITIONERS)


def get_practitioner(practitioner_id: str) -> Optional[Practitioner]:
    """Look up a practitioner by id. Returns None if not found."""
    for practitioner in PRACTITIONERS:
        if practitioner.id == practitioner_id:
            return practitioner
    return None


def search_practitioners(practitioners: list[Practitioner], term: str) -> list[Practitioner]:
    """Match a search term against name, specializations, and offered services."""
    needle = term.lower().strip()
    if not needle:
        return list(practitioners)

    def _matches(p: Practitioner) -> bool:
        if needle in p.name.lower():
            return True
        if any(needle in spec.lower() for spec in p.specializations):
            return True
        return any(needle in svc.lower() for svc in p.services)

    matches = [p for p in practitioners if _matches(p)]
    logger.debug("Practitioner search '%s' matched %d", term, len(matches))
    return matches
