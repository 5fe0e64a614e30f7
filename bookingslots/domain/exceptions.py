"""
Domain-specific exception hierarchy for the booking slots package.
"""


class BookingSlotsError(Exception):
    """Base class for all application-level errors."""


class ScheduleDataError(BookingSlotsError):
    """Raised when business or staff hours cannot be parsed."""


class SelectionError(BookingSlotsError):
    """Raised when a booking is submitted with an incomplete selection."""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message
