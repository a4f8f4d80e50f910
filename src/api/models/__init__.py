"""
InstaVault - API Models
=======================

Pydantic models for API request/response schemas.
"""

from .base import ErrorResponse, HealthResponse, InfoResponse
from .fetch import (
    DownloadMethod,
    FetchVideoFallback,
    FetchVideoRequest,
    FetchVideoSuccess,
    ServiceFailure,
)
from .services import ServiceInfo, ServicesResponse, ManualTestResponse

__all__ = [
    # Base
    "ErrorResponse",
    "HealthResponse",
    "InfoResponse",
    # Fetch
    "FetchVideoRequest",
    "FetchVideoSuccess",
    "FetchVideoFallback",
    "ServiceFailure",
    "DownloadMethod",
    # Services
    "ServiceInfo",
    "ServicesResponse",
    "ManualTestResponse",
]
