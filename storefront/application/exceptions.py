class StorefrontError(Exception):
    """Base class for errors raised by the booking and cart core."""
    pass


class ValidationError(StorefrontError):
    """Raised when required fields are missing or malformed."""
    pass


class NotFoundError(StorefrontError):
    """Raised when operating on a reservation id that does not exist."""
    pass


class InvalidStatusError(StorefrontError):
    """Raised when a status value is outside the enumerated set."""
    pass


class InvalidTransitionError(InvalidStatusError):
    """Raised when a status move is not allowed from the current status."""
    pass


class SlotConflictError(StorefrontError):
    """Raised when a (date, time) slot is already held by a live reservation."""

    def __init__(self, day: str, time: str) -> None:
        super().__init__(f"Slot {day} {time} is already booked")
        self.day = day
        self.time = time


class PaymentNotConfirmedError(StorefrontError):
    """Raised when a deposit is recorded without a succeeded provider confirmation."""
    pass
