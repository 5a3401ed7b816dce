# ============================================================================
# app/services/appointment/appointment_service.py
# ============================================================================
"""Service for creating bookings and moving them through their lifecycle"""
import re
import secrets
import string
from datetime import date, time
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from email_validator import EmailNotValidError, validate_email
import logging

from app.config.settings import get_settings
from app.core.exceptions import (
    Conflict,
    InvalidTransition,
    NotFound,
    ServiceUnavailable,
    ValidationError,
)
from app.models.appointment import Appointment, AppointmentStatus
from app.models.service import Service
from app.services.business.business_service import BusinessService
from app.utils.time_utils import parse_slot_time

logger = logging.getLogger(__name__)

BOOKING_CODE_ALPHABET = string.ascii_uppercase + string.digits
BOOKING_CODE_SUFFIX_LENGTH = 6
BOOKING_CODE_PREFIX_LENGTH = 10


def generate_booking_code(business_name: str) -> str:
    """
    "<LETTERS>-<RANDOM>", e.g. "JUANSBARBE-7Q2K9X".

    The prefix is the business name reduced to uppercase letters (at most 10),
    the suffix is 6 random alphanumerics.
    """
    prefix = re.sub(r"[^A-Z]", "", business_name.upper())[:BOOKING_CODE_PREFIX_LENGTH] or "BOOKING"
    suffix = "".join(secrets.choice(BOOKING_CODE_ALPHABET) for _ in range(BOOKING_CODE_SUFFIX_LENGTH))
    return f"{prefix}-{suffix}"


class AppointmentService:
    """Handles appointment operations"""

    @staticmethod
    def create_booking(
            db: Session,
            slug: str,
            service_id: int,
            customer_name: str,
            day: date,
            start_time: str,
            email: Optional[str] = None,
            phone: Optional[str] = None,
            max_code_attempts: Optional[int] = None
    ) -> Appointment:
        """
        Book a slot from the public booking page.

        All-or-nothing: either a pending appointment is committed or an
        error is raised and nothing is written.

        Args:
            start_time: "2:30 PM" or "14:30"; stored as 24-hour time

        Raises:
            ValidationError: missing name, bad email or time format
            NotFound: unknown slug, or no active service with that id in the business
            Conflict: slot already held by a non-cancelled appointment
            ServiceUnavailable: no unused booking code after the allowed attempts
        """
        customer_name = (customer_name or "").strip()
        if not customer_name:
            raise ValidationError("Customer name is required", field="customerName")

        try:
            slot_time = parse_slot_time(start_time)
        except (ValueError, AttributeError) as e:
            raise ValidationError(str(e), field="time")

        if email:
            try:
                email = validate_email(email, check_deliverability=False).normalized
            except EmailNotValidError as e:
                raise ValidationError(str(e), field="email")

        business = BusinessService.get_business_by_slug(db, slug)

        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business.id,
            Service.is_active == True
        ).first()
        if not service:
            raise NotFound("Service not found")

        if AppointmentService._find_active_slot(db, business.id, day, slot_time):
            logger.info(f"Slot {day.isoformat()} {slot_time:%H:%M} already taken for business {business.id}")
            raise Conflict("Time slot is not available")

        if max_code_attempts is None:
            max_code_attempts = get_settings().BOOKING_CODE_MAX_ATTEMPTS

        business_id = business.id
        business_name = business.name

        for attempt in range(1, max_code_attempts + 1):
            booking_code = generate_booking_code(business_name)
            if AppointmentService._code_exists(db, booking_code):
                logger.warning(f"Booking code collision on attempt {attempt}")
                continue

            appointment = Appointment(
                business_id=business_id,
                service_id=service_id,
                customer_name=customer_name,
                email=email or None,
                phone=phone or None,
                date=day,
                time=slot_time,
                status=AppointmentStatus.PENDING.value,
                booking_code=booking_code,
            )
            db.add(appointment)

            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                # A concurrent request won the slot or the code between our checks
                if AppointmentService._find_active_slot(db, business_id, day, slot_time):
                    logger.info(f"Lost booking race for business {business_id} at {day.isoformat()} {slot_time:%H:%M}")
                    raise Conflict("Time slot is not available")
                if AppointmentService._code_exists(db, booking_code):
                    logger.warning(f"Booking code collision at insert on attempt {attempt}")
                    continue
                raise

            db.refresh(appointment)
            logger.info(
                f"Created appointment {appointment.id} ({appointment.booking_code}) "
                f"for business {business_id} on {day.isoformat()} {slot_time:%H:%M}"
            )
            return appointment

        logger.error(f"Could not generate a unique booking code after {max_code_attempts} attempts")
        raise ServiceUnavailable("Could not complete the booking, please try again")

    @staticmethod
    def update_status(
            db: Session,
            business_id: int,
            appointment_id: int,
            new_status: AppointmentStatus
    ) -> Appointment:
        """
        Owner-initiated status change.

        pending -> confirmed | cancelled, confirmed -> done | cancelled;
        cancelled and done are terminal.
        """
        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.business_id == business_id
        ).first()
        if not appointment:
            raise NotFound("Appointment not found")

        new_status = AppointmentStatus(new_status)
        if not appointment.can_transition_to(new_status):
            raise InvalidTransition(
                f"Cannot change status from '{appointment.status}' to '{new_status.value}'"
            )

        old_status = appointment.status
        appointment.status = new_status.value
        db.commit()
        db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} status {old_status} -> {appointment.status}")
        return appointment

    @staticmethod
    def _find_active_slot(db: Session, business_id: int, day: date, slot_time: time) -> Optional[Appointment]:
        return db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.date == day,
            Appointment.time == slot_time,
            Appointment.status != AppointmentStatus.CANCELLED.value
        ).first()

    @staticmethod
    def _code_exists(db: Session, booking_code: str) -> bool:
        return db.query(Appointment.id).filter(
            Appointment.booking_code == booking_code
        ).first() is not None
