# ============================================================================
# FILE: app/api/v1/public/business.py
# What the public booking page needs to render a business
# ============================================================================
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.schemas.business import BusinessPublicOut, WorkingHourOut
from app.schemas.service import ServiceResponse
from app.services.business.business_service import BusinessService
from app.services.catalog.catalog_service import CatalogService

router = APIRouter(tags=["public-business"])


@router.get("/settings/business/{slug}", response_model=BusinessPublicOut)
def get_business_profile(
        slug: str = Path(..., description="Business booking handle"),
        db: Session = Depends(get_db)
):
    business = BusinessService.get_business_by_slug(db, slug)
    return business.to_public_dict()


@router.get("/settings/working-hours/{slug}", response_model=List[WorkingHourOut])
def get_public_working_hours(
        slug: str = Path(...),
        db: Session = Depends(get_db)
):
    business = BusinessService.get_business_by_slug(db, slug)
    return [row.to_dict() for row in BusinessService.get_working_hours(db, business.id)]


@router.get("/services/public/{slug}", response_model=List[ServiceResponse])
def get_public_services(
        slug: str = Path(...),
        db: Session = Depends(get_db)
):
    """Active services a customer can book"""
    business = BusinessService.get_business_by_slug(db, slug)
    return [
        service.to_dict()
        for service in CatalogService.list_services(db, business.id)
        if service.is_active
    ]
