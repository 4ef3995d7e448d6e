class BookingError(Exception):
    """Base class for errors raised by the booking flow."""


class FetchFailed(BookingError):
    """The availability query failed (network, server or payload error)."""


class DateOutOfRange(BookingError):
    """The requested date is in the past or beyond the booking horizon."""


class SlotUnavailable(BookingError):
    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Slot {slot} is already booked or unavailable")


class InsufficientConsecutiveSlots(BookingError):
    def __init__(self, start_time: str, duration: int):
        self.start_time = start_time
        self.duration = duration
        super().__init__(f"Not enough consecutive hours from {start_time} (need {duration})")


class EmptySelection(BookingError):
    def __init__(self):
        super().__init__("No time slots selected")


class BookingSubmissionFailed(BookingError):
    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
