# app/api/v1/dashboard/services.py
"""
Service Management API Endpoints
Handles CRUD operations for the owner's services
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.api.dependencies import get_current_business
from app.models.business import Business
from app.schemas.service import ServiceCreate, ServiceUpdate, ServiceResponse, ServiceListResponse
from app.services.catalog.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ServiceListResponse)
def list_services(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    List all services, newest first
    """
    services = CatalogService.list_services(db, business.id)
    return ServiceListResponse(
        total=len(services),
        services=[ServiceResponse(**s.to_dict()) for s in services]
    )


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
        service_data: ServiceCreate,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Create a new service
    """
    service = CatalogService.create_service(
        db,
        business_id=business.id,
        name=service_data.name,
        price=service_data.price,
        duration=service_data.duration
    )
    return ServiceResponse(**service.to_dict())


@router.put("/{service_id}", response_model=ServiceResponse)
def update_service(
        service_id: int,
        service_data: ServiceUpdate,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Update a service's name, price and duration
    """
    service = CatalogService.update_service(
        db,
        business_id=business.id,
        service_id=service_id,
        name=service_data.name,
        price=service_data.price,
        duration=service_data.duration,
        is_active=service_data.is_active
    )
    return ServiceResponse(**service.to_dict())


@router.delete("/{service_id}")
def delete_service(
        service_id: int,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Delete a service. Refused while any non-cancelled appointment uses it.
    """
    CatalogService.delete_service(db, business_id=business.id, service_id=service_id)
    return {"message": "Service deleted successfully"}
