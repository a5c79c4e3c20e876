# rentnest/core/errors.py
"""
Domain errors raised by the booking lifecycle services.

Each error carries the HTTP status it maps to; the handler registered in
rentnest.main turns them into JSON responses.
"""
from fastapi import status


class BookingError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Booking operation failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def code(self) -> str:
        return type(self).__name__


class NotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Forbidden(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class Unavailable(BookingError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Property is not available"


class TooEarly(BookingError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Booking has not ended yet"


class StorageError(BookingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage error"
