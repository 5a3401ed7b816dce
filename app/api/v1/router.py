"""
API v1 router setup
Organized into: public (booking page) and dashboard (owner bearer token) routes
"""
from fastapi import APIRouter

from app.api.v1.public import booking, business as public_business
from app.api.v1.dashboard import appointments, services, business

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(booking.router, tags=["Public"])
api_v1_router.include_router(public_business.router, tags=["Public"])

# ============================================================================
# DASHBOARD ROUTES (Bearer token required)
# ============================================================================
api_v1_router.include_router(appointments.router, tags=["Dashboard"])
api_v1_router.include_router(services.router, tags=["Dashboard"])
api_v1_router.include_router(business.router, tags=["Dashboard"])


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and the authentication each route group expects.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "JWT Bearer token required (business owner)"
        }
    }
