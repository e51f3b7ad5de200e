"""Exception types raised by the booking core.

Validation problems the patient can fix are returned as messages, not
raised. These exceptions mark calls the caller should not have made.
"""


class BookingError(Exception):
    """Base class for booking core errors."""


class MissingPriceError(BookingError):
    """Raised when a service without a price is added to the cart."""


class InvalidTransitionError(BookingError):
    """Raised when a transition is not valid from the current stage."""


class SubmissionNotAllowedError(BookingError):
    """Raised when submit is called while the form is invalid or in flight."""


class IncompleteBookingError(BookingError):
    """Raised when a payload is requested before every stage is complete."""
