"""
InstaVault - Base API Models
============================

Common response models and utilities.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.core.constants import APP_NAME, TIMEZONE


def now() -> datetime:
    """Current time in the service timezone."""
    return datetime.now(TIMEZONE)


# =============================================================================
# Error Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    error_code: str
    message: str
    details: Optional[dict] = None


# =============================================================================
# Health Models
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = APP_NAME
    uptime: str
    uptime_seconds: int
    started_at: datetime
    timestamp: datetime = Field(default_factory=now)


class InfoResponse(BaseModel):
    """Root endpoint payload."""

    status: str = "OK"
    message: str
    services: int
    endpoints: dict[str, str]
    deployed: bool = True
    timestamp: datetime = Field(default_factory=now)


__all__ = [
    "now",
    "ErrorResponse",
    "HealthResponse",
    "InfoResponse",
]
