"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.activities import router as activities_router

router = APIRouter(prefix="/api/v1")

router.include_router(dashboard_router)
router.include_router(activities_router)
