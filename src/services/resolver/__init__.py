"""
InstaVault - Resolver Module
============================

Obtains a downloadable media link for an Instagram post by rotating
through third-party downloader services.

Default rotation:
- Cobalt (only when INSTAVAULT_COBALT_URL is set)
- SaveFrom
- InstaSave
- igram.io
- DownloadGram

When every service fails, manual download links are returned instead.
"""

from .config import (
    DEFAULT_SERVICES,
    FALLBACK_PROVIDERS,
    BodyFormat,
    FallbackLink,
    FallbackProvider,
    HTTPMethod,
    InvalidURLError,
    ResolutionOutcome,
    ResolutionResult,
    ServiceDescriptor,
    build_registry,
    extract_shortcode,
)
from .extraction import FieldPathRule, SelectorRule
from .service import ResolverService

__all__ = [
    "ResolverService",
    "ServiceDescriptor",
    "ResolutionResult",
    "ResolutionOutcome",
    "FallbackLink",
    "FallbackProvider",
    "SelectorRule",
    "FieldPathRule",
    "HTTPMethod",
    "BodyFormat",
    "InvalidURLError",
    "DEFAULT_SERVICES",
    "FALLBACK_PROVIDERS",
    "build_registry",
    "extract_shortcode",
]
