"""
Pydantic schemas for business settings and working hours
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import time


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class WorkingHourIn(BaseModel):
    """One weekday of the weekly schedule (0=Sunday)"""
    day_of_week: int = Field(..., ge=0, le=6)
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None

    @model_validator(mode="after")
    def check_times_when_open(self):
        """Open days need both times, in order; closed days ignore them"""
        if not self.is_open:
            self.open_time = None
            self.close_time = None
            return self

        if self.open_time is None:
            raise ValueError("Valid open_time is required when is_open is true")
        if self.close_time is None:
            raise ValueError("Valid close_time is required when is_open is true")
        if self.open_time >= self.close_time:
            raise ValueError("open_time must be before close_time")
        return self


class WorkingHoursUpdate(BaseModel):
    workingHours: List[WorkingHourIn]


class BusinessProfileUpdate(BaseModel):
    """Schema for updating business display details"""
    businessName: str = Field(..., min_length=1, max_length=200)
    contactInfo: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class WorkingHourOut(BaseModel):
    day_of_week: int
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None


class BusinessPublicOut(BaseModel):
    business_name: str
    slug: str
    contact_info: Optional[str] = None
    address: Optional[str] = None
