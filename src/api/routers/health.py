"""
InstaVault - Health Router
==========================

Liveness and info endpoints.
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends

from src.api.config import get_api_config
from src.api.dependencies import get_resolver
from src.api.models.base import HealthResponse, InfoResponse
from src.core.constants import APP_NAME, TIMEZONE
from src.services.resolver import ResolverService


router = APIRouter(tags=["Health"])

# Track startup time
_start_time: float = 0

ENDPOINTS = {
    "home": "GET /",
    "health": "GET /health",
    "services": "GET /services",
    "fetchVideo": "POST /fetch-video",
    "test": "GET /test",
}


def set_start_time() -> None:
    """Set the API start time."""
    global _start_time
    _start_time = time.time()


@router.get("/")
async def root(
    resolver: ResolverService = Depends(get_resolver),
) -> InfoResponse:
    """Service info with the list of endpoints."""
    return InfoResponse(
        message=f"{APP_NAME} Backend Running",
        services=len(resolver.services),
        endpoints=ENDPOINTS,
        deployed=get_api_config().deployed,
    )


@router.get("/health")
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns uptime and the current timestamp.
    """
    now = datetime.now(TIMEZONE)
    start = datetime.fromtimestamp(_start_time, tz=TIMEZONE) if _start_time else now
    uptime_seconds = int(time.time() - _start_time) if _start_time else 0

    # Format uptime as human-readable
    hours, remainder = divmod(uptime_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    uptime_str = f"{hours}h {minutes}m {seconds}s"

    return HealthResponse(
        uptime=uptime_str,
        uptime_seconds=uptime_seconds,
        started_at=start,
        timestamp=now,
    )


__all__ = ["router", "set_start_time", "ENDPOINTS"]
