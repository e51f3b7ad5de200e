"""
Mock booking submission endpoint.

In production, this would POST the wire payload to the
nurse procedure bookings API and map its response.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from toltimed.schemas.booking_schema import BookingPayload, BookingResult
from toltimed.wizard.schedule import total_cost

logger = logging.getLogger(__name__)

_bookings: dict[str, dict[str, Any]] = {}
_failures: list[str] = []


async def submit_booking(payload: BookingPayload) -> BookingResult:
    """Accept a composed booking and return a confirmation reference."""
    # Yield once so callers observe a real await boundary.
    await asyncio.sleep(0)

    if _failures:
        reason = _failures.pop(0)
        logger.warning("Booking rejected by endpoint: %s", reason)
        raise RuntimeError(reason)

    ref = f"TM-{uuid.uuid4().hex[:6].upper()}"
    cost = total_cost(payload.service.price or 0, payload.schedule_config)
    record = {
        "booking_ref": ref,
        "status": "pending",
        "total_cost": cost,
        "created_at": datetime.now(timezone.utc).isoformat(),
        **payload.to_wire(),
    }
    _bookings[ref] = record
    logger.info(
        "Booking created: %s for %s with %s starting %s",
        ref, payload.service.name, payload.practitioner.name,
        record["start_date"],
    )
    return BookingResult(
        success=True,
        booking_ref=ref,
        message="Appointment(s) booked successfully!",
        total_cost=cost,
        created_at=datetime.now(timezone.utc),
    )


def get_booking(booking_ref: str) -> Optional[dict[str, Any]]:
    """Retrieve a stored booking record by reference."""
    return _bookings.get(booking_ref)


def fail_next(reason: str = "Booking failed") -> None:
    """Make the next submission raise, as a rejected request would."""
    _failures.append(reason)


def reset() -> None:
    """Clear all bookings and queued failures. Used by test fixtures for isolation."""
    _bookings.clear()
    _failures.clear()
