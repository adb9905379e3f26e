"""
System API router.

Handles the root endpoint and health checks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.config import settings
from api.middleware import get_request_id
from zonecheck import __version__

router = APIRouter(tags=["System"])


@router.get("/")
async def root():
    """
    API root endpoint.

    Returns basic API information and available endpoint categories.
    """
    return {
        "name": "ZONECHECK API",
        "version": __version__,
        "status": "operational",
        "docs": "/api/docs",
        "endpoints": {
            "health": "/api/health",
            "zones": "/api/zones/...",
        }
    }


@router.get("/api/health")
async def health_check():
    """
    Liveness check for load balancers.

    The service has no external dependencies, so it is healthy whenever
    it can answer.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "environment": settings.environment,
        "request_id": get_request_id(),
    }
