"""
Pydantic schemas for bookings, availability and status updates
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Literal
from datetime import date

from app.models.appointment import AppointmentStatus
from app.utils.time_utils import parse_slot_time


# ============================================================================
# Request Schemas
# ============================================================================

class BookingRequest(BaseModel):
    """Public booking form submitted by a customer."""
    serviceId: int
    customerName: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    date: date
    time: str = Field(..., description='"2:30 PM" or "14:30"')
    slug: str = Field(..., min_length=1)

    @field_validator("customerName", "slug", "phone", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        """
        Normalize either accepted format to 24-hour "HH:MM".

        Seconds are accepted and dropped, same as the booking ledger.
        """
        return parse_slot_time(v).strftime("%H:%M")

    class Config:
        json_schema_extra = {
            "example": {
                "serviceId": 1,
                "customerName": "Juan Dela Cruz",
                "email": "juan@example.com",
                "phone": "09171234567",
                "date": "2026-10-20",
                "time": "2:30 PM",
                "slug": "juans-barbershop"
            }
        }


class StatusUpdateRequest(BaseModel):
    status: AppointmentStatus


# ============================================================================
# Response Schemas
# ============================================================================

class BookingCreatedResponse(BaseModel):
    message: str = "Appointment booked successfully"
    bookingCode: str
    appointmentId: int


class UnavailableSlot(BaseModel):
    time: str
    reason: Literal["booked", "past"]


class AvailabilityResponse(BaseModel):
    availableSlots: List[str]
    unavailableSlots: List[UnavailableSlot]


class DashboardStatsResponse(BaseModel):
    todayAppointments: int
    pendingConfirmations: int
    totalServices: int
    monthlyRevenue: float
