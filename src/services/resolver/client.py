"""
InstaVault - Downloader Service Client
======================================

Sends one request to one downloader service and reads the media link
out of the response.
"""

import asyncio
from typing import Any

import aiohttp

from src.core.constants import BROWSER_USER_AGENT, HTML_ACCEPT, JSON_ACCEPT
from src.core.logger import logger
from src.utils.http import HTTPSessionManager
from .config import BodyFormat, HTTPMethod, ResolutionResult, ServiceDescriptor


def build_request(descriptor: ServiceDescriptor, instagram_url: str) -> dict[str, Any]:
    """Keyword arguments for http.get/post for this service."""
    headers = {
        "User-Agent": BROWSER_USER_AGENT,
        "Accept": JSON_ACCEPT if descriptor.extractor.accepts_json else HTML_ACCEPT,
    }
    payload = {descriptor.param_key: instagram_url}

    if descriptor.method == HTTPMethod.GET:
        return {"params": payload, "headers": headers}

    if descriptor.body == BodyFormat.JSON:
        headers["Content-Type"] = "application/json"
        return {"json": payload, "headers": headers}

    return {"data": payload, "headers": headers}


async def try_service(
    http: HTTPSessionManager,
    descriptor: ServiceDescriptor,
    instagram_url: str,
    timeout: float,
) -> ResolutionResult:
    """Single attempt against one service. Never raises for remote failures."""
    request = build_request(descriptor, instagram_url)
    send = http.get if descriptor.method == HTTPMethod.GET else http.post

    logger.tree("Downloader Request", [
        ("Service", descriptor.name),
        ("Method", descriptor.method.value),
        ("Endpoint", descriptor.url[:60]),
    ], emoji="🌐")

    try:
        async with send(
            descriptor.url,
            timeout=aiohttp.ClientTimeout(total=timeout),
            **request,
        ) as resp:
            if not 200 <= resp.status < 300:
                # Consume response body to properly close connection
                await resp.read()
                return ResolutionResult(
                    success=False,
                    source=descriptor.name,
                    error=f"Request failed with status code {resp.status}",
                )
            body = await resp.text()

        link = descriptor.extractor.extract(body)
        video_url = descriptor.absolute_link(link) if link else None

    except asyncio.TimeoutError:
        return ResolutionResult(
            success=False,
            source=descriptor.name,
            error=f"Timed out after {timeout:g}s",
        )
    except aiohttp.ClientError as e:
        return ResolutionResult(
            success=False,
            source=descriptor.name,
            error=f"{type(e).__name__}: {str(e)[:80]}",
        )
    except Exception as e:
        logger.error_tree("Downloader Request Exception", e, [
            ("Service", descriptor.name),
        ])
        return ResolutionResult(
            success=False,
            source=descriptor.name,
            error=f"{type(e).__name__}: {str(e)[:80]}",
        )

    if not video_url:
        if link:
            logger.debug("Unusable Download Link", [
                ("Service", descriptor.name),
                ("Link", link[:60]),
            ])
        return ResolutionResult(
            success=False,
            source=descriptor.name,
            error=descriptor.extractor.missing_message,
        )

    return ResolutionResult(
        success=True,
        source=descriptor.name,
        video_url=video_url,
    )


__all__ = ["build_request", "try_service"]
