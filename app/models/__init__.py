# app/models/__init__.py
from .base import Base
from .user import User
from .business import Business, WorkingHour
from .service import Service
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "Base",
    "User",
    "Business",
    "WorkingHour",
    "Service",
    "Appointment",
    "AppointmentStatus",
]
