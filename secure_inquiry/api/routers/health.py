"""Health router: GET /health with storage and circuit breaker status."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from secure_inquiry.api.dependencies import get_health_monitor
from secure_inquiry.config.settings import get_settings
from secure_inquiry.scalability.health_monitor import HealthMonitor

router = APIRouter()


@router.get("/health")
async def health(
    request: Request,
    monitor: Annotated[HealthMonitor, Depends(get_health_monitor)],
):
    """Aggregated health plus correlation ID from request state. Always 200; see "status"."""
    settings = get_settings()
    report = await monitor.system_health()
    return {
        **report,
        "correlation_id": getattr(request.state, "correlation_id", None),
        "environment": settings.environment,
        "version": settings.version,
    }
