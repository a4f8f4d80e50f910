"""
InstaVault - Resolver Configuration
===================================

Service registry, fallback providers, and data classes for the resolver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import quote, urljoin, urlsplit

from src.core.config import Config
from .extraction import ExtractionRule, FieldPathRule, SelectorRule


# =============================================================================
# Enums
# =============================================================================

class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class BodyFormat(str, Enum):
    FORM = "form"
    JSON = "json"


# =============================================================================
# Errors
# =============================================================================

class InvalidURLError(ValueError):
    """Input URL is missing or not from an accepted domain."""


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class ServiceDescriptor:
    """One third-party downloader integration."""
    name: str
    method: HTTPMethod
    url: str
    extractor: ExtractionRule
    param_key: str = "url"
    body: BodyFormat = BodyFormat.FORM

    @property
    def origin(self) -> str:
        """Scheme and host of the service endpoint."""
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"

    def absolute_link(self, link: str) -> Optional[str]:
        """
        Resolve a relative link against the service's own origin.

        Returns None for in-page anchors (``#``) and for anything that does
        not end up as an http(s) URL (``javascript:``, ``mailto:``, ``data:``).
        """
        if link.startswith(("http://", "https://")):
            return link
        if link.startswith("#"):
            return None
        resolved = urljoin(self.origin + "/", link)
        parts = urlsplit(resolved)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            return None
        return resolved


@dataclass(frozen=True)
class ResolutionResult:
    """Result of a single service attempt."""
    success: bool
    source: str
    video_url: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FallbackProvider:
    """Manual download site; ``{url}`` in the link is the encoded input."""
    service: str
    link: str
    instructions: str

    def build(self, instagram_url: str) -> "FallbackLink":
        return FallbackLink(
            service=self.service,
            link=self.link.replace("{url}", encode_component(instagram_url)),
            instructions=self.instructions,
        )


@dataclass(frozen=True)
class FallbackLink:
    """Manual download suggestion returned when every service failed."""
    service: str
    link: str
    instructions: str


@dataclass
class ResolutionOutcome:
    """Overall answer of the resolver for one input URL."""
    url: str
    result: Optional[ResolutionResult] = None
    attempts: list[ResolutionResult] = field(default_factory=list)
    fallback: list[FallbackLink] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.result is not None and self.result.success

    @property
    def tried(self) -> list[str]:
        return [attempt.source for attempt in self.attempts]


# =============================================================================
# Registry
# =============================================================================

DEFAULT_SERVICES: Tuple[ServiceDescriptor, ...] = (
    ServiceDescriptor(
        name="SaveFrom",
        method=HTTPMethod.POST,
        url="https://en.savefrom.net/download-from-instagram",
        extractor=SelectorRule("a.download-link"),
    ),
    ServiceDescriptor(
        name="InstaSave",
        method=HTTPMethod.POST,
        url="https://instasave.website/download",
        extractor=SelectorRule("a.download-button"),
    ),
    ServiceDescriptor(
        name="igram.io",
        method=HTTPMethod.GET,
        url="https://igram.io/dl/",
        extractor=SelectorRule("a.download"),
    ),
    ServiceDescriptor(
        name="DownloadGram",
        method=HTTPMethod.POST,
        url="https://downloadgram.com/",
        extractor=SelectorRule("a.download_link"),
    ),
)


def cobalt_service(api_url: str) -> ServiceDescriptor:
    """Descriptor for a self-hosted Cobalt API instance."""
    return ServiceDescriptor(
        name="Cobalt",
        method=HTTPMethod.POST,
        url=api_url,
        extractor=FieldPathRule(("url",), alternatives=(("picker", 0, "url"),)),
        body=BodyFormat.JSON,
    )


def build_registry(settings: Config) -> Tuple[ServiceDescriptor, ...]:
    """Registry in trial order for the given settings."""
    if settings.COBALT_URL:
        return (cobalt_service(settings.COBALT_URL), *DEFAULT_SERVICES)
    return DEFAULT_SERVICES


# =============================================================================
# Fallback Providers
# =============================================================================

FALLBACK_PROVIDERS: Tuple[FallbackProvider, ...] = (
    FallbackProvider(
        service="SaveTube",
        link="https://savetube.app/instagram?url={url}",
        instructions="Visit this link and click download",
    ),
    FallbackProvider(
        service="Instagram Video Downloader",
        link="https://instadownloader.io/",
        instructions="Paste your URL on this website",
    ),
    FallbackProvider(
        service="SSYoutube (works for Instagram)",
        link="https://ssyoutube.com/watch?v={url}",
        instructions="Works for Instagram videos too",
    ),
)


# =============================================================================
# Helper Functions
# =============================================================================

def encode_component(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe="!~*'()")


def extract_shortcode(url: str) -> Optional[str]:
    """Last non-empty path segment of a post URL."""
    path = urlsplit(url.strip()).path
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else None
