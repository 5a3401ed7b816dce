# ===== app/services/availability/availability_service.py =====
from typing import Dict, List, Optional
from datetime import date
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import NotFound, ValidationError
from app.models.appointment import Appointment, BLOCKING_STATUSES
from app.models.business import Business
from app.models.service import Service
from app.services.business.business_service import BusinessService
from app.utils.clock import Clock
from app.utils.time_utils import format_time_24, generate_slots, to_24_hour

logger = logging.getLogger(__name__)

REASON_BOOKED = "booked"
REASON_PAST = "past"


class AvailabilityService:
    """Turns working hours, service duration and existing bookings into bookable slots"""

    @staticmethod
    def compute_availability(
            db: Session,
            business: Business,
            day: date,
            service_id: int,
            clock: Clock,
            duration_minutes: Optional[int] = None
    ) -> Dict[str, List]:
        """
        Partition the day's candidate slots into available and unavailable.

        Read-only: repeated calls with the same inputs and clock give the
        same answer.

        Args:
            business: tenant whose calendar is inspected
            day: business-local calendar date
            service_id: must belong to `business`
            clock: source of "now" for past-slot filtering
            duration_minutes: optional step override, defaults to the service duration

        Returns:
            {"available": ["9:00 AM", ...],
             "unavailable": [{"time": "10:00 AM", "reason": "booked"}, ...]}

        Raises:
            ValidationError: non-positive duration
            NotFound: service is not one of this business's active services
        """
        if duration_minutes is not None and duration_minutes <= 0:
            raise ValidationError("Service duration must be a positive number of minutes", field="duration")

        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business.id,
            Service.is_active == True
        ).first()
        if not service:
            raise NotFound("Service not found")

        step = duration_minutes if duration_minutes is not None else service.duration
        if not step or step <= 0:
            raise ValidationError("Service duration must be a positive number of minutes", field="duration")

        working_hour = BusinessService.get_working_hour_for_date(db, business.id, day)
        if not working_hour or not working_hour.is_open:
            return {"available": [], "unavailable": []}

        candidates = generate_slots(working_hour.open_time, working_hour.close_time, step)
        booked = AvailabilityService._booked_times(db, business.id, day, service.id)

        now = clock()
        is_today = day == now.date()
        current_time = now.strftime("%H:%M")

        available = []
        unavailable = []
        for slot in candidates:
            slot24 = to_24_hour(slot)

            if slot24 in booked:
                unavailable.append({"time": slot, "reason": REASON_BOOKED})
            elif is_today and slot24 <= current_time:
                unavailable.append({"time": slot, "reason": REASON_PAST})
            else:
                available.append(slot)

        logger.debug(
            f"Availability for business {business.id} on {day.isoformat()}: "
            f"{len(available)} open, {len(unavailable)} blocked"
        )
        return {"available": available, "unavailable": unavailable}

    @staticmethod
    def _booked_times(db: Session, business_id: int, day: date, service_id: int) -> set:
        """Start times ("HH:MM") held by pending or confirmed bookings"""
        rows = db.query(Appointment.time).filter(
            Appointment.business_id == business_id,
            Appointment.date == day,
            Appointment.service_id == service_id,
            Appointment.status.in_(BLOCKING_STATUSES)
        ).all()
        return {format_time_24(row.time) for row in rows}
