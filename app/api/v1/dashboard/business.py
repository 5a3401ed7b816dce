# ============================================================================
# FILE: app/api/v1/dashboard/business.py
# Owner settings: business profile and weekly working hours
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.api.dependencies import get_current_business
from app.models.business import Business
from app.schemas.business import (
    BusinessProfileUpdate,
    BusinessPublicOut,
    WorkingHourOut,
    WorkingHoursUpdate,
)
from app.services.business.business_service import BusinessService

router = APIRouter(prefix="/settings", tags=["dashboard-settings"])


@router.get("/general", response_model=BusinessPublicOut)
async def get_general_settings(
        business: Business = Depends(get_current_business)
):
    """Business name, slug and contact details"""
    return business.to_public_dict()


@router.put("/general", response_model=BusinessPublicOut)
async def update_general_settings(
        body: BusinessProfileUpdate,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Update display details. The slug does not change."""
    business = BusinessService.update_profile(
        db,
        business,
        business_name=body.businessName,
        contact_info=body.contactInfo,
        address=body.address
    )
    return business.to_public_dict()


@router.get("/working-hours", response_model=List[WorkingHourOut])
async def get_working_hours(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    return [row.to_dict() for row in BusinessService.get_working_hours(db, business.id)]


@router.put("/working-hours", response_model=List[WorkingHourOut])
async def update_working_hours(
        body: WorkingHoursUpdate,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """
    Replace the weekly schedule. Send all seven days (0=Sunday);
    open_time and close_time are required for open days only.
    """
    rows = BusinessService.replace_working_hours(db, business, body.workingHours)
    return [row.to_dict() for row in rows]
