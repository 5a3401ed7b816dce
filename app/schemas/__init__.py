# app/schemas/__init__.py
from .business import (
    WorkingHourIn,
    WorkingHoursUpdate,
    BusinessProfileUpdate,
    WorkingHourOut,
    BusinessPublicOut
)

from .service import (
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
    ServiceListResponse
)

from .appointment import (
    BookingRequest,
    StatusUpdateRequest,
    BookingCreatedResponse,
    UnavailableSlot,
    AvailabilityResponse,
    DashboardStatsResponse
)
