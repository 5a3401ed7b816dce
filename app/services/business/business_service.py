# app/services/business/business_service.py
"""Service for managing businesses and their weekly working hours"""
import re
from datetime import date, time
from typing import Iterable, List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import Conflict, NotFound, ValidationError
from app.models.business import Business, WorkingHour
from app.models.user import User
from app.schemas.business import WorkingHourIn

logger = logging.getLogger(__name__)

# (day_of_week, open, close); 0=Sunday. Weekends closed.
DEFAULT_WORKING_HOURS = [
    (0, None, None),
    (1, time(9, 0), time(17, 0)),
    (2, time(9, 0), time(17, 0)),
    (3, time(9, 0), time(17, 0)),
    (4, time(9, 0), time(17, 0)),
    (5, time(9, 0), time(17, 0)),
    (6, None, None),
]


def day_of_week(day: date) -> int:
    """Weekday index with 0=Sunday, matching WorkingHour.day_of_week."""
    return (day.weekday() + 1) % 7


def generate_slug(business_name: str) -> str:
    """URL-safe handle: lowercase, non-alphanumeric runs collapsed to '-'."""
    return re.sub(r"[^a-z0-9]+", "-", business_name.lower()).strip("-")


class BusinessService:
    """Handles business-related operations"""

    @staticmethod
    def get_business_by_slug(db: Session, slug: str) -> Business:
        """Get a business by its public slug, NotFound otherwise"""
        business = db.query(Business).filter(Business.slug == slug).first()
        if not business:
            raise NotFound("Business not found")
        return business

    @staticmethod
    def get_business_for_owner(db: Session, user: User) -> Business:
        business = db.query(Business).filter(Business.owner_id == user.id).first()
        if not business:
            raise NotFound("Business not found")
        return business

    @staticmethod
    def _unique_slug(db: Session, business_name: str) -> str:
        base = generate_slug(business_name) or "business"
        slug = base
        suffix = 2
        while db.query(Business.id).filter(Business.slug == slug).first():
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    @staticmethod
    def register_business(
            db: Session,
            email: str,
            password: str,
            business_name: str,
            contact_info: Optional[str] = None,
            address: Optional[str] = None
    ) -> Tuple[User, Business]:
        """
        Create an owner account together with its business and the default
        weekly schedule.

        Raises:
            ValidationError: if the business name is blank
            Conflict: if the email is already registered
        """
        if not business_name or not business_name.strip():
            raise ValidationError("Business name is required", field="business_name")

        if db.query(User.id).filter(User.email == email).first():
            raise Conflict("User already exists")

        user = User(email=email, hashed_password=User.hash_password(password))
        business = Business(
            owner=user,
            name=business_name.strip(),
            slug=BusinessService._unique_slug(db, business_name),
            contact_info=contact_info,
            address=address,
        )
        db.add_all([user, business])
        BusinessService.create_default_working_hours(db, business)
        db.commit()
        db.refresh(business)

        logger.info(f"Registered business {business.id} with slug '{business.slug}'")
        return user, business

    @staticmethod
    def update_profile(
            db: Session,
            business: Business,
            business_name: str,
            contact_info: Optional[str] = None,
            address: Optional[str] = None
    ) -> Business:
        """Update display details; the slug stays stable once issued"""
        if not business_name or not business_name.strip():
            raise ValidationError("Business name is required", field="business_name")

        business.name = business_name.strip()
        business.contact_info = contact_info or None
        business.address = address or None
        db.commit()
        db.refresh(business)
        return business

    # ------------------------------------------------------------------
    # Working hours
    # ------------------------------------------------------------------

    @staticmethod
    def create_default_working_hours(db: Session, business: Business) -> None:
        for day, open_time, close_time in DEFAULT_WORKING_HOURS:
            business.working_hours.append(WorkingHour(
                day_of_week=day,
                is_open=open_time is not None,
                open_time=open_time,
                close_time=close_time,
            ))

    @staticmethod
    def get_working_hours(db: Session, business_id: int) -> List[WorkingHour]:
        return db.query(WorkingHour).filter(
            WorkingHour.business_id == business_id
        ).order_by(WorkingHour.day_of_week).all()

    @staticmethod
    def get_working_hour_for_date(db: Session, business_id: int, day: date) -> Optional[WorkingHour]:
        """Working hours row for the weekday of `day`, if one is configured"""
        return db.query(WorkingHour).filter(
            WorkingHour.business_id == business_id,
            WorkingHour.day_of_week == day_of_week(day)
        ).first()

    @staticmethod
    def replace_working_hours(
            db: Session,
            business: Business,
            rows: Iterable[WorkingHourIn]
    ) -> List[WorkingHour]:
        """
        Replace the whole weekly schedule in one transaction.

        Exactly one row per weekday is required. Closed days are stored
        without times.
        """
        rows = list(rows)
        days = [row.day_of_week for row in rows]
        if sorted(days) != list(range(7)):
            raise ValidationError(
                "Working hours must contain exactly one entry for each day of the week",
                field="workingHours"
            )

        db.query(WorkingHour).filter(WorkingHour.business_id == business.id).delete()
        for row in rows:
            db.add(WorkingHour(
                business_id=business.id,
                day_of_week=row.day_of_week,
                is_open=row.is_open,
                open_time=row.open_time if row.is_open else None,
                close_time=row.close_time if row.is_open else None,
            ))
        db.commit()

        logger.info(f"Working hours replaced for business {business.id}")
        return BusinessService.get_working_hours(db, business.id)
