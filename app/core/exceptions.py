# app/core/exceptions.py
"""Domain errors raised by the service layer and mapped to HTTP in main.py"""
from typing import Optional


class BookingError(Exception):
    """Base class for errors the client is allowed to see."""
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"detail": self.detail}


class ValidationError(BookingError):
    """Malformed input; raised before any persistence access."""
    status_code = 422

    def __init__(self, detail: str, field: Optional[str] = None):
        super().__init__(detail)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class NotFound(BookingError):
    status_code = 404


class Conflict(BookingError):
    status_code = 409


class InvalidTransition(BookingError):
    status_code = 409


class ServiceUnavailable(BookingError):
    status_code = 503
