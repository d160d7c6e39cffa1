"""
Booking errors.

Raised by the service layer, rendered by the exception handler in main.py
as {"detail": message, "code": code}. No state is changed when one is raised.
"""

from fastapi import status


class BookingError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BOOKING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Malformed date, missing field, illegal transition."""
    code = "VALIDATION_ERROR"


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(BookingError):
    """
    Requested slot is taken (or the date is locked by another write).
    Reported as 400 like any rejected booking; the caller may retry.
    """
    code = "CONFLICT"
