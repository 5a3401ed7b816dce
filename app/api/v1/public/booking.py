# ============================================================================
# FILE: app/api/v1/public/booking.py
# Public booking endpoints - no authentication, used by the booking page
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
import logging

from app.config.database import get_db
from app.schemas.appointment import (
    AvailabilityResponse,
    BookingCreatedResponse,
    BookingRequest,
)
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.appointment_service import AppointmentService
from app.services.availability.availability_service import AvailabilityService
from app.services.business.business_service import BusinessService
from app.utils.clock import Clock, get_clock

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["public-booking"])


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
        booking: BookingRequest,
        db: Session = Depends(get_db)
):
    """
    Book a slot. The appointment starts out pending until the owner confirms it.
    """
    appointment = AppointmentService.create_booking(
        db=db,
        slug=booking.slug,
        service_id=booking.serviceId,
        customer_name=booking.customerName,
        day=booking.date,
        start_time=booking.time,
        email=booking.email,
        phone=booking.phone
    )

    return BookingCreatedResponse(
        bookingCode=appointment.booking_code,
        appointmentId=appointment.id
    )


@router.get("/available-slots/{slug}/{day}", response_model=AvailabilityResponse)
def get_available_slots(
        slug: str = Path(..., description="Business booking handle"),
        day: date = Path(..., description="Calendar date, YYYY-MM-DD"),
        service_id: int = Query(..., alias="serviceId"),
        duration: Optional[int] = Query(None, gt=0, description="Slot length in minutes, defaults to the service duration"),
        clock: Clock = Depends(get_clock),
        db: Session = Depends(get_db)
):
    """
    Slots for one day, split into bookable and unavailable (booked or already past).
    """
    business = BusinessService.get_business_by_slug(db, slug)

    result = AvailabilityService.compute_availability(
        db=db,
        business=business,
        day=day,
        service_id=service_id,
        clock=clock,
        duration_minutes=duration
    )

    return AvailabilityResponse(
        availableSlots=result["available"],
        unavailableSlots=result["unavailable"]
    )


@router.get("/track/{code}")
def track_booking(
        code: str = Path(..., min_length=1, max_length=40),
        db: Session = Depends(get_db)
):
    """
    Full booking details for an exact booking code.
    """
    return AppointmentQueryService.track_by_code(db, code)
