# ============================================================================
# app/services/appointment/appointment_query_service.py
# Pure read-side logic for the dashboard - no FastAPI dependencies
# ============================================================================
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import case, func
from datetime import date, timedelta
from typing import Optional, Dict, Any, List

from app.core.exceptions import NotFound, ValidationError
from app.models.appointment import Appointment, AppointmentStatus, BLOCKING_STATUSES, STATUS_PRIORITY
from app.models.service import Service
from app.utils.clock import Clock
from app.utils.time_utils import format_time_24

STATUS_FILTER_ALL = "all"


def _month_bounds(today: date):
    first = today.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first


class AppointmentQueryService:
    """Service layer for appointment listing and dashboard figures."""

    @staticmethod
    def list_appointments(
            db: Session,
            business_id: int,
            status: Optional[str] = None,
            day: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """
        Appointments for one business, pending first, cancelled last,
        then by date and start time.

        `status` is an exact status or "all"; `day` an exact calendar date.
        """
        query = db.query(Appointment).options(joinedload(Appointment.service)).filter(
            Appointment.business_id == business_id
        )

        if status and status != STATUS_FILTER_ALL:
            try:
                status_value = AppointmentStatus(status).value
            except ValueError:
                raise ValidationError(f"Unknown status '{status}'", field="status")
            query = query.filter(Appointment.status == status_value)
        if day:
            query = query.filter(Appointment.date == day)

        priority = case(STATUS_PRIORITY, value=Appointment.status, else_=len(STATUS_PRIORITY) + 1)
        appointments = query.order_by(
            priority.asc(),
            Appointment.date.asc(),
            Appointment.time.asc(),
            Appointment.id.asc()
        ).all()

        return [AppointmentQueryService._serialize_appointment(appt) for appt in appointments]

    @staticmethod
    def get_todays_appointments(db: Session, business_id: int, clock: Clock) -> List[Dict[str, Any]]:
        """All of today's appointments regardless of status, earliest first."""
        today = clock().date()

        appointments = db.query(Appointment).options(joinedload(Appointment.service)).filter(
            Appointment.business_id == business_id,
            Appointment.date == today
        ).order_by(Appointment.time.asc()).all()

        return [AppointmentQueryService._serialize_appointment(appt) for appt in appointments]

    @staticmethod
    def get_upcoming_appointments(db: Session, business_id: int, clock: Clock) -> List[Dict[str, Any]]:
        """Pending or confirmed appointments after today."""
        today = clock().date()

        appointments = db.query(Appointment).options(joinedload(Appointment.service)).filter(
            Appointment.business_id == business_id,
            Appointment.date > today,
            Appointment.status.in_(BLOCKING_STATUSES)
        ).order_by(Appointment.date.asc(), Appointment.time.asc()).all()

        return [AppointmentQueryService._serialize_appointment(appt) for appt in appointments]

    @staticmethod
    def get_dashboard_stats(db: Session, business_id: int, clock: Clock) -> Dict[str, Any]:
        """
        Dashboard figures for the owner's landing page.

        Monthly revenue only counts work marked done this calendar month.
        """
        today = clock().date()
        month_start, next_month_start = _month_bounds(today)

        today_count = db.query(func.count(Appointment.id)).filter(
            Appointment.business_id == business_id,
            Appointment.date == today
        ).scalar()

        pending_count = db.query(func.count(Appointment.id)).filter(
            Appointment.business_id == business_id,
            Appointment.status == AppointmentStatus.PENDING.value
        ).scalar()

        service_count = db.query(func.count(Service.id)).filter(
            Service.business_id == business_id,
            Service.is_active == True
        ).scalar()

        revenue = db.query(func.coalesce(func.sum(Service.price), 0)).select_from(Appointment).join(
            Service, Appointment.service_id == Service.id
        ).filter(
            Appointment.business_id == business_id,
            Appointment.status == AppointmentStatus.DONE.value,
            Appointment.date >= month_start,
            Appointment.date < next_month_start
        ).scalar()

        return {
            "todayAppointments": today_count or 0,
            "pendingConfirmations": pending_count or 0,
            "totalServices": service_count or 0,
            "monthlyRevenue": float(revenue or 0),
        }

    @staticmethod
    def track_by_code(db: Session, booking_code: str) -> Dict[str, Any]:
        """Public lookup by exact booking code."""
        appointment = db.query(Appointment).options(
            joinedload(Appointment.service),
            joinedload(Appointment.business)
        ).filter(Appointment.booking_code == booking_code).first()

        if not appointment:
            raise NotFound("Booking not found")

        data = AppointmentQueryService._serialize_appointment(appointment)
        data.update(appointment.business.to_public_dict())
        return data

    @staticmethod
    def _serialize_appointment(appointment: Appointment) -> Dict[str, Any]:
        """Convert Appointment model (with its service) to dictionary."""
        service = appointment.service
        return {
            "id": appointment.id,
            "service_id": appointment.service_id,
            "customer_name": appointment.customer_name,
            "email": appointment.email,
            "phone": appointment.phone,
            "date": appointment.date.isoformat(),
            "time": format_time_24(appointment.time),
            "status": appointment.status,
            "booking_code": appointment.booking_code,
            "service_name": service.name if service else None,
            "price": float(service.price) if service and service.price is not None else None,
            "duration": service.duration if service else None,
            "created_at": appointment.created_at.isoformat() if appointment.created_at else None,
        }
