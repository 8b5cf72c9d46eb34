"""Health routes - liveness and credential status."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import get_settings
from repwatch.core.config import Settings
from repwatch.schemas.api import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(app_settings: Settings = Depends(get_settings)):
    """
    Health check endpoint for load balancer and container health checks.

    Reports which credential-gated upstreams have a key configured; a
    missing key degrades only that source, so the service stays "ok".
    """
    return HealthResponse(status="ok", env=app_settings.ENV, configured_sources=app_settings.configured_sources)
