# backend/routers/health_router.py
"""
Health router - thin web layer that delegates to HealthService.
Handles HTTP concerns only, business logic is in services.health.HealthService.
"""

from fastapi import APIRouter, Depends

from deps import get_health_service
from services.health import HealthService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check_endpoint(
    health_service: HealthService = Depends(get_health_service),
):
    # Service returns either HealthResponse or JSONResponse with 503 status
    return await health_service.perform_health_check()


@router.get("/live")
async def liveness_check():
    """Simple liveness check for container orchestration - returns 200 if server is up"""
    return {"status": "ok"}
