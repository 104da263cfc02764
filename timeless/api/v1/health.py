"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from timeless.core.config import settings
from timeless.core.database import db_manager
from timeless.core.logging import log
from timeless.schemas.common import HealthCheckResponse


router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Basic health check"""
    return HealthCheckResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.version,
    )


@router.get("/health/ready", response_model=HealthCheckResponse)
async def readiness_probe() -> HealthCheckResponse:
    """Readiness probe - checks the database round trip"""
    database = "connected"
    try:
        await db_manager.ping()
    except Exception as e:
        log.error("Database health check failed", error=str(e))
        database = "unavailable"

    return HealthCheckResponse(
        status="ok" if database == "connected" else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.version,
        database=database,
    )
