# ============================================================================
# FILE: app/api/v1/dashboard/appointments.py
# Owner-authenticated endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional, Literal

from app.config.database import get_db
from app.models.business import Business
from app.api.dependencies import get_current_business
from app.schemas.appointment import StatusUpdateRequest, DashboardStatsResponse
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.appointment_service import AppointmentService
from app.utils.clock import Clock, get_clock

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


@router.get("")
async def list_appointments(
        status: Optional[Literal["all", "pending", "confirmed", "cancelled", "done"]] = Query(
            None, description="Filter by status, or 'all'"
        ),
        date: Optional[date] = Query(None, description="Only appointments on this calendar date"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    List appointments for your business, pending first and cancelled last.
    Requires authenticated session.
    """
    return AppointmentQueryService.list_appointments(
        db=db,
        business_id=business.id,
        status=status,
        day=date
    )


@router.get("/today")
async def get_todays_appointments(
        business: Business = Depends(get_current_business),
        clock: Clock = Depends(get_clock),
        db: Session = Depends(get_db)
):
    """
    Get all appointments scheduled for today.
    Requires authenticated session.
    """
    return AppointmentQueryService.get_todays_appointments(
        db=db,
        business_id=business.id,
        clock=clock
    )


@router.get("/upcoming")
async def get_upcoming_appointments(
        business: Business = Depends(get_current_business),
        clock: Clock = Depends(get_clock),
        db: Session = Depends(get_db)
):
    """
    Get pending and confirmed appointments after today.
    Requires authenticated session.
    """
    return AppointmentQueryService.get_upcoming_appointments(
        db=db,
        business_id=business.id,
        clock=clock
    )


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
        business: Business = Depends(get_current_business),
        clock: Clock = Depends(get_clock),
        db: Session = Depends(get_db)
):
    """
    Today's bookings, pending confirmations, active services and this month's revenue.
    Requires authenticated session.
    """
    return AppointmentQueryService.get_dashboard_stats(
        db=db,
        business_id=business.id,
        clock=clock
    )


@router.put("/{appointment_id}")
async def update_appointment_status(
        body: StatusUpdateRequest,
        appointment_id: int = Path(..., description="The appointment ID"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Move an appointment through its lifecycle.
    Requires authenticated session.
    """
    appointment = AppointmentService.update_status(
        db=db,
        business_id=business.id,
        appointment_id=appointment_id,
        new_status=body.status
    )

    return {
        "message": "Appointment updated successfully",
        "id": appointment.id,
        "status": appointment.status
    }
