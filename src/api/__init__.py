"""API router aggregation."""

from fastapi import APIRouter

from src.api.commission import router as commission_router
from src.api.health import router as health_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(commission_router)

__all__ = ["api_router"]
