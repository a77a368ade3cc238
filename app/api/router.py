"""
API router setup.
Collects the per-feature routers under one router.
"""

from fastapi import APIRouter

from app.api.endpoints import health, exports

# Main API router
api_router = APIRouter()

# Health check (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# PDF exports: proposal, timesheet, invoice (/exports)
api_router.include_router(
    exports.router,
    prefix="/exports",
    tags=["exports"]
)
