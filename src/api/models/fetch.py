"""
InstaVault - Fetch Models
=========================

Request/response schemas for POST /fetch-video.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.services.resolver import FallbackLink, ResolutionOutcome, extract_shortcode
from .base import now


EXHAUSTED_ERROR = "All download services failed. Try a different link."
EXHAUSTED_NOTE = "Automatic download failed. Use one of these services instead:"


class FetchVideoRequest(BaseModel):
    """Body of POST /fetch-video."""

    instagramUrl: Optional[str] = None


class FetchVideoSuccess(BaseModel):
    """A downloader service returned a media link."""

    success: bool = True
    videoUrl: str
    source: str
    message: str

    @classmethod
    def from_outcome(cls, outcome: ResolutionOutcome) -> "FetchVideoSuccess":
        result = outcome.result
        return cls(
            videoUrl=result.video_url,
            source=result.source,
            message=f"Video fetched via {result.source}",
        )


class ServiceFailure(BaseModel):
    """Why one service did not produce a link."""

    service: str
    error: str


class DownloadMethod(BaseModel):
    """Manual download suggestion."""

    service: str
    link: str
    instructions: str

    @classmethod
    def from_link(cls, link: FallbackLink) -> "DownloadMethod":
        return cls(service=link.service, link=link.link, instructions=link.instructions)


class FetchVideoFallback(BaseModel):
    """Every service failed; manual links are offered instead."""

    success: bool = False
    error: str = EXHAUSTED_ERROR
    tried: list[str]
    failures: list[ServiceFailure] = Field(default_factory=list)
    url: str
    shortcode: Optional[str] = None
    note: str = EXHAUSTED_NOTE
    download_methods: list[DownloadMethod]
    timestamp: datetime = Field(default_factory=now)

    @classmethod
    def from_outcome(cls, outcome: ResolutionOutcome) -> "FetchVideoFallback":
        return cls(
            tried=outcome.tried,
            failures=[
                ServiceFailure(service=attempt.source, error=attempt.error or "Unknown error")
                for attempt in outcome.attempts
            ],
            url=outcome.url,
            shortcode=extract_shortcode(outcome.url),
            download_methods=[DownloadMethod.from_link(link) for link in outcome.fallback],
        )


__all__ = [
    "FetchVideoRequest",
    "FetchVideoSuccess",
    "FetchVideoFallback",
    "ServiceFailure",
    "DownloadMethod",
]
