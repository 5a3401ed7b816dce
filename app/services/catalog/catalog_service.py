# app/services/catalog/catalog_service.py
"""Service catalog: what a business offers, at what price and duration"""
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import Conflict, NotFound, ValidationError
from app.models.appointment import Appointment, AppointmentStatus
from app.models.service import Service

logger = logging.getLogger(__name__)


class CatalogService:
    """Handles service CRUD scoped to one business"""

    @staticmethod
    def list_services(db: Session, business_id: int) -> List[Service]:
        return db.query(Service).filter(
            Service.business_id == business_id
        ).order_by(Service.created_at.desc(), Service.id.desc()).all()

    @staticmethod
    def get_service(db: Session, business_id: int, service_id: int) -> Service:
        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business_id
        ).first()
        if not service:
            raise NotFound("Service not found")
        return service

    @staticmethod
    def _validate(name: str, price, duration) -> None:
        if not name or not name.strip():
            raise ValidationError("Service name is required", field="name")
        if price is None or price < 0:
            raise ValidationError("Price must be zero or more", field="price")
        if not isinstance(duration, int) or duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes", field="duration")

    @staticmethod
    def create_service(db: Session, business_id: int, name: str, price, duration: int) -> Service:
        CatalogService._validate(name, price, duration)

        service = Service(
            business_id=business_id,
            name=name.strip(),
            price=Decimal(str(price)),
            duration=duration,
            is_active=True
        )
        db.add(service)
        db.commit()
        db.refresh(service)

        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    def update_service(
            db: Session,
            business_id: int,
            service_id: int,
            name: str,
            price,
            duration: int,
            is_active: Optional[bool] = None
    ) -> Service:
        CatalogService._validate(name, price, duration)
        service = CatalogService.get_service(db, business_id, service_id)

        service.name = name.strip()
        service.price = Decimal(str(price))
        service.duration = duration
        if is_active is not None:
            service.is_active = is_active

        db.commit()
        db.refresh(service)

        logger.info(f"Updated service {service.id}")
        return service

    @staticmethod
    def delete_service(db: Session, business_id: int, service_id: int) -> None:
        """
        Delete a service that no live appointment points at.

        Raises:
            NotFound: no such service in this business
            Conflict: a non-cancelled appointment still references it
        """
        service = CatalogService.get_service(db, business_id, service_id)

        in_use = db.query(Appointment.id).filter(
            Appointment.service_id == service.id,
            Appointment.status != AppointmentStatus.CANCELLED.value
        ).first()
        if in_use:
            logger.warning(f"Refused to delete service {service.id}: active appointments exist")
            raise Conflict("Cannot delete service with active appointments")

        # Remaining cancelled bookings keep their history with service_id set to NULL
        db.delete(service)
        db.commit()

        logger.info(f"Deleted service {service_id}")
