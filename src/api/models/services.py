"""
InstaVault - Service Listing Models
===================================

Schemas for GET /services and GET /test.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.services.resolver import ServiceDescriptor
from .base import now


class ServiceInfo(BaseModel):
    """One registered downloader service."""

    name: str
    method: str
    url: str
    extraction: str
    extraction_rule: str

    @classmethod
    def from_descriptor(cls, descriptor: ServiceDescriptor) -> "ServiceInfo":
        return cls(
            name=descriptor.name,
            method=descriptor.method.value,
            url=descriptor.url,
            extraction=descriptor.extractor.kind,
            extraction_rule=descriptor.extractor.describe(),
        )


class ServicesResponse(BaseModel):
    """Registered services in trial order."""

    count: int
    services: list[ServiceInfo]


class ManualTestResponse(BaseModel):
    """Canned request for manual testing."""

    message: str = "Test endpoint working"
    testUrl: str
    curlCommand: str
    timestamp: datetime = Field(default_factory=now)


__all__ = ["ServiceInfo", "ServicesResponse", "ManualTestResponse"]
