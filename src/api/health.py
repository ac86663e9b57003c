"""Health check endpoints for monitoring and orchestration."""

from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src.config import settings
from src.models.timestamps import utc_now

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    timestamp: datetime
    version: str
    environment: str


class LivenessResponse(BaseModel):
    """Response model for liveness probe."""

    status: str


class ReadinessResponse(BaseModel):
    """Response model for readiness probe."""

    status: str
    checks: dict[str, str]
    last_refresh: datetime | None = None
    refresh_error: str | None = None


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        timestamp=utc_now(),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe - app is running."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Readiness probe - app can serve the dashboard.

    Checks:
    - Database is connected and healthy
    - Dashboard service is initialized

    A failed last refresh is reported but does not make the app unready,
    since the dashboard keeps serving the previous data.
    """
    checks: dict[str, str] = {}

    db = getattr(request.app.state, "db", None)
    if db:
        try:
            is_healthy = await db.is_healthy()
            checks["database"] = "ok" if is_healthy else "failed"
        except Exception:
            checks["database"] = "failed"
    else:
        checks["database"] = "not_configured"

    dashboard = getattr(request.app.state, "dashboard_service", None)
    last_refresh = None
    refresh_error = None
    if dashboard is not None:
        checks["dashboard"] = "ok"
        last_refresh = dashboard.snapshot.last_updated
        refresh_error = dashboard.snapshot.error
    else:
        checks["dashboard"] = "not_configured"

    status = "ready" if all(v == "ok" for v in checks.values()) else "not_ready"
    return ReadinessResponse(
        status=status,
        checks=checks,
        last_refresh=last_refresh,
        refresh_error=refresh_error,
    )
