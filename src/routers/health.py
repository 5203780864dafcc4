"""Health check routes for the profiling API."""

from datetime import datetime
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.config import get_settings
from src.database.mongodb import MongoDB
from src.utils.datetime_utils import utc_now
from src.utils.logger import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Health check status response."""
    status: str
    timestamp: datetime
    version: str
    environment: str
    services: Dict[str, str]


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Basic health check endpoint."""
    settings = get_settings()
    return HealthStatus(
        status="healthy",
        timestamp=utc_now(),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        services={},
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check():
    """Readiness check; 503 until MongoDB answers a ping."""
    if await MongoDB.ping():
        return {"status": "ready", "database": "healthy"}

    logger.warning("Readiness check failed: database unreachable")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "database": "unhealthy"},
    )
