"""
InstaVault - Resolver Service
=============================

Walks the downloader registry in order until one service returns a media
link. Falls back to manual download links when every service fails.
"""

import asyncio
from typing import Iterable, Optional

from src.core.config import Config, config as default_config
from src.core.logger import logger
from src.utils.http import HTTPSessionManager, http_session
from . import client
from .config import (
    FALLBACK_PROVIDERS,
    FallbackLink,
    FallbackProvider,
    InvalidURLError,
    ResolutionOutcome,
    ServiceDescriptor,
    build_registry,
)


DEFAULT_DOMAIN = "instagram.com"


class ResolverService:
    """Service rotation resolver for Instagram media links."""

    def __init__(
        self,
        services: Optional[Iterable[ServiceDescriptor]] = None,
        fallback_providers: Iterable[FallbackProvider] = FALLBACK_PROVIDERS,
        http: Optional[HTTPSessionManager] = None,
        settings: Optional[Config] = None,
    ):
        settings = settings or default_config
        self.services: tuple[ServiceDescriptor, ...] = (
            tuple(services) if services is not None else build_registry(settings)
        )
        self.fallback_providers = tuple(fallback_providers)
        # URLs are matched lower-cased, so the markers must be too
        self.accepted_domains = tuple(
            domain.strip().lower() for domain in settings.ACCEPTED_DOMAINS if domain.strip()
        ) or (DEFAULT_DOMAIN,)
        self.timeout = settings.REQUEST_TIMEOUT
        self.delay = settings.RETRY_DELAY
        self._http = http or http_session

        logger.tree("Resolver Service Initialized", [
            ("Services", ", ".join(s.name for s in self.services) or "None"),
            ("Domains", ", ".join(self.accepted_domains)),
            ("Timeout", f"{self.timeout:g}s"),
            ("Delay", f"{self.delay:g}s"),
        ], emoji="🔁")

    def validate_url(self, url: object) -> str:
        """Return the trimmed URL, or raise InvalidURLError."""
        if not isinstance(url, str) or not url.strip():
            raise InvalidURLError("Valid Instagram URL is required")
        url = url.strip()
        if not any(domain in url.lower() for domain in self.accepted_domains):
            raise InvalidURLError("Please provide a valid Instagram URL")
        return url

    def fallback_links(self, url: str) -> list[FallbackLink]:
        """Static manual download suggestions for a URL."""
        return [provider.build(url) for provider in self.fallback_providers]

    async def resolve(self, url: str, request_id: Optional[str] = None) -> ResolutionOutcome:
        """
        Try each service in registry order; first success wins.

        Raises InvalidURLError for bad input. Remote failures never raise,
        they end up in ``outcome.attempts``. ``request_id`` only tags the
        log output so it can be matched with the API request.
        """
        url = self.validate_url(url)
        outcome = ResolutionOutcome(url=url)
        tag = [("Request ID", request_id)] if request_id else []

        logger.tree("Resolution Started", tag + [
            ("URL", url[:60] + "..." if len(url) > 60 else url),
            ("Services", str(len(self.services))),
        ], emoji="📥")

        for index, descriptor in enumerate(self.services):
            logger.info(f"Trying {descriptor.name}...")
            result = await client.try_service(
                self._http, descriptor, url, self.timeout
            )
            outcome.attempts.append(result)

            if result.success:
                outcome.result = result
                logger.tree("Resolution Success", tag + [
                    ("Service", descriptor.name),
                    ("Attempt", f"{index + 1}/{len(self.services)}"),
                    ("Video URL", (result.video_url or "")[:60]),
                ], emoji="✅")
                return outcome

            logger.tree("Service Failed", tag + [
                ("Service", descriptor.name),
                ("Error", (result.error or "Unknown")[:80]),
            ], emoji="⚠️")

            if self.delay > 0 and index < len(self.services) - 1:
                await asyncio.sleep(self.delay)

        outcome.fallback = self.fallback_links(url)
        logger.tree("All Services Failed", tag + [
            ("Tried", ", ".join(outcome.tried) or "None"),
            ("Fallback Links", str(len(outcome.fallback))),
        ], emoji="❌")
        return outcome

    async def close(self) -> None:
        """Close the outbound HTTP session."""
        await self._http.close()
