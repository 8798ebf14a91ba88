"""Domain exceptions raised by the booking services.

Routers translate these into HTTP errors or into the ``{"success": false}``
envelope used by the assistant endpoints.
"""


class BookingError(Exception):
    """Base class for booking domain errors."""

    message = "Booking failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidStayDatesError(BookingError):
    message = "Check-out date must be after check-in date"


class RoomNotFoundError(BookingError):
    message = "Room not found"


class RoomUnavailableError(BookingError):
    message = "Room is not available for the selected dates"


class UserNotFoundError(BookingError):
    message = "User not found"


class BookingNotFoundError(BookingError):
    message = "Booking not found"
