"""
Booking finalizer: patient identity, form validity, and guarded submission.

States:
    unset -> self | other -> ready -> submitting -> submitted | failed

The self/other choice decides which fields are mandatory. Submission is
delegated to an injected async function and guarded by a local flag, so
a second submit while the first is outstanding is refused rather than
sent twice. The flag is cleared only after the call settles.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from pydantic import ValidationError

from toltimed.config import settings
from toltimed.errors import IncompleteBookingError, SubmissionNotAllowedError
from toltimed.logging_context import get_booking_logger
from toltimed.schemas.booking_schema import (
    BookingDetails,
    BookingPayload,
    BookingResult,
    BookingSubject,
    OtherSubject,
    SelfSubject,
)
from toltimed.utils import normalize_phone

logger = get_booking_logger(__name__)

SubmitFn = Callable[[BookingPayload], Awaitable[BookingResult]]

OTHER_REQUIRED_FIELDS = ("first_name", "last_name", "email", "phone", "address", "relationship")

SUCCESS_MESSAGE = "Appointment(s) booked successfully!"
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."


class Notifier(Protocol):
    """Toast/alert channel owned by the host application."""

    def success(self, message: str) -> None: ...

    def failure(self, message: str) -> None: ...


class Navigator(Protocol):
    """Route changes owned by the host application."""

    def to_receipt(self, result: BookingResult) -> None: ...


class FinalizerState(str, Enum):
    UNSET = "unset"
    SELF = "self"
    OTHER = "other"
    READY = "ready"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


class BookingFinalizer:
    """Final wizard stage. Owns the patient form and the submit guard."""

    def __init__(
        self,
        submit_fn: SubmitFn,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self._submit_fn = submit_fn
        self._notifier = notifier
        self._navigator = navigator
        self._booking_for_self: Optional[bool] = None
        self._details = BookingDetails()
        self._submitting = False
        self._outcome: Optional[FinalizerState] = None
        self._last_result: Optional[BookingResult] = None

    @property
    def booking_for_self(self) -> Optional[bool]:
        return self._booking_for_self

    @property
    def details(self) -> BookingDetails:
        return self._details

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def last_result(self) -> Optional[BookingResult]:
        return self._last_result

    @property
    def state(self) -> FinalizerState:
        if self._submitting:
            return FinalizerState.SUBMITTING
        if self._outcome is not None:
            return self._outcome
        if self._booking_for_self is None:
            return FinalizerState.UNSET
        if self.is_form_valid():
            return FinalizerState.READY
        return FinalizerState.SELF if self._booking_for_self else FinalizerState.OTHER

    def choose_subject(self, for_self: bool) -> None:
        """Record whether the patient is the account holder."""
        self._booking_for_self = bool(for_self)
        if self._outcome == FinalizerState.FAILED:
            self._outcome = None

    def update_details(self, **fields: str) -> BookingDetails:
        """Merge field edits into the form. Unknown field names are rejected."""
        unknown = set(fields) - set(BookingDetails.model_fields)
        if unknown:
            raise ValueError(f"Unknown booking detail fields: {sorted(unknown)}")
        self._details = BookingDetails(**{**self._details.model_dump(), **fields})
        if self._outcome == FinalizerState.FAILED:
            self._outcome = None
        return self._details

    def missing_fields(self) -> list[str]:
        """Mandatory fields still blank for the current self/other choice."""
        if self._booking_for_self is None:
            return []
        required = ("address",) if self._booking_for_self else OTHER_REQUIRED_FIELDS
        missing = []
        for name in required:
            value = getattr(self._details, name)
            # Judged by what reaches the payload: "n/a" normalizes to nothing.
            cleaned = normalize_phone(value) if name == "phone" else value.strip()
            if not cleaned:
                missing.append(name)
        return missing

    def is_form_valid(self) -> bool:
        if self._booking_for_self is None:
            return False
        return not self.missing_fields()

    def can_submit(self) -> bool:
        return (
            self.is_form_valid()
            and not self._submitting
            and self._outcome != FinalizerState.SUBMITTED
        )

    def is_submit_disabled(self, external_loading: bool = False) -> bool:
        """Whether the submit control should be disabled.

        ``external_loading`` is the host's own loading indicator. It is
        combined with, never a replacement for, the local in-flight flag.
        """
        return external_loading or not self.can_submit()

    def to_subject(self) -> BookingSubject:
        """Build the tagged patient identity from the form.

        Raises:
            IncompleteBookingError: If the form is not valid.
        """
        if not self.is_form_valid():
            raise IncompleteBookingError(
                f"Booking form incomplete, missing: {self.missing_fields() or ['self/other choice']}"
            )
        d = self._details
        try:
            if self._booking_for_self:
                return SelfSubject(address=d.address.strip(), test_result=d.test_result)
            return OtherSubject(
                first_name=d.first_name.strip(),
                last_name=d.last_name.strip(),
                email=d.email.strip(),
                phone=normalize_phone(d.phone),
                address=d.address.strip(),
                relationship=d.relationship.strip(),
            )
        except ValidationError as exc:
            raise IncompleteBookingError(str(exc)) from exc

    async def submit(self, build_payload: Callable[[BookingSubject], BookingPayload]) -> BookingResult:
        """
        Submit the booking once.

        Args:
            build_payload: Composes the full payload from the patient subject.

        Returns:
            The endpoint's result, or a failed result describing the error.

        Raises:
            SubmissionNotAllowedError: If the form is invalid, a submission
                is already in flight, or the booking was already submitted.
        """
        if not self.can_submit():
            raise SubmissionNotAllowedError(
                f"Cannot submit in state '{self.state.value}'"
            )

        payload = build_payload(self.to_subject())
        self._submitting = True
        logger.info("Submitting booking for practitioner %s", payload.practitioner.id)
        try:
            result = await asyncio.wait_for(
                self._submit_fn(payload),
                timeout=settings.wizard.submission_timeout_sec,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Booking submission timed out after %.1fs",
                settings.wizard.submission_timeout_sec,
            )
            result = BookingResult(success=False, message=NETWORK_ERROR_MESSAGE)
        except OSError as exc:
            logger.warning("Booking submission network error: %s", exc)
            result = BookingResult(success=False, message=NETWORK_ERROR_MESSAGE)
        except Exception as exc:
            logger.exception("Booking submission failed")
            result = BookingResult(success=False, message=str(exc) or "Booking failed")
        finally:
            self._submitting = False

        self._last_result = result
        if result.success:
            self._outcome = FinalizerState.SUBMITTED
            logger.info("Booking confirmed: %s", result.booking_ref)
            if self._notifier is not None:
                self._notifier.success(result.message or SUCCESS_MESSAGE)
            if self._navigator is not None:
                self._navigator.to_receipt(result)
        else:
            self._outcome = FinalizerState.FAILED
            if self._notifier is not None:
                self._notifier.failure(f"Booking failed: {result.message or 'please try again.'}")
        return result
