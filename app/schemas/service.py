"""
Pydantic schemas for the service catalog
"""
from pydantic import BaseModel, Field
from typing import Optional, List


class ServiceCreate(BaseModel):
    """Request model for creating or replacing a service"""
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    duration: int = Field(..., ge=1, description="Duration in minutes")

    class Config:
        json_schema_extra = {
            "example": {"name": "Haircut", "price": 250, "duration": 30}
        }


class ServiceUpdate(ServiceCreate):
    """Updates replace name, price and duration together"""
    is_active: Optional[bool] = None


class ServiceResponse(BaseModel):
    """Response model for service data"""
    id: int
    business_id: int
    name: str
    price: float
    duration: int
    formatted_duration: str
    is_active: bool
    created_at: Optional[str] = None


class ServiceListResponse(BaseModel):
    """Response model for service list"""
    total: int
    services: List[ServiceResponse]
