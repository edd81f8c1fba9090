"""
Health check endpoints.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..deps import ServicesDep

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger("docintro")


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Liveness check. Returns the current status of the service.
    """
    settings = getattr(request.app.state, "settings", None)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=settings.app_version if settings else "unknown",
        service=settings.app_name if settings else "DocIntro",
    )


@router.get("/ready")
async def readiness_check(services: ServicesDep):
    """
    Readiness check.

    Pings the database when a Motor client is attached, checks the video
    directory and reports storage and email configuration.
    """
    checks = {}
    all_ok = True

    if services.mongo_client is not None:
        try:
            await services.mongo_client.admin.command("ping")
            checks["database"] = "ok"
        except Exception as e:
            logger.error(f"Database readiness check failed: {e}")
            checks["database"] = f"error: {str(e)[:50]}"
            all_ok = False
    else:
        checks["database"] = "not_connected"

    if services.local_store.root.is_dir():
        checks["video_storage"] = "ok"
    else:
        checks["video_storage"] = "missing"
        all_ok = False

    checks["storage_mode"] = services.storage_mode
    checks["email"] = "configured" if services.email_service.is_configured else "not_configured"

    body = {"status": "ready" if all_ok else "degraded", "timestamp": datetime.utcnow().isoformat(), "checks": checks}
    return JSONResponse(status_code=200 if all_ok else 503, content=body)
