"""
InstaVault - Fetch Router
=========================

POST /fetch-video: resolve an Instagram URL to a downloadable media link.
"""

from typing import Union

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_resolver
from src.api.errors import invalid_url
from src.api.models.base import ErrorResponse
from src.api.models.fetch import FetchVideoFallback, FetchVideoRequest, FetchVideoSuccess
from src.core.logger import logger
from src.services.resolver import InvalidURLError, ResolverService


router = APIRouter(tags=["Fetch"])


@router.post(
    "/fetch-video",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def fetch_video(
    request: Request,
    body: FetchVideoRequest,
    resolver: ResolverService = Depends(get_resolver),
) -> Union[FetchVideoSuccess, FetchVideoFallback]:
    """
    Try each downloader service in order.

    Returns the first media link found, or manual download links
    when every service failed (still HTTP 200).
    """
    request_id = getattr(request.state, "request_id", None)

    logger.tree("Fetch Video Request", [
        ("Request ID", request_id or "-"),
        ("URL", str(body.instagramUrl)[:60]),
    ], emoji="📥")

    try:
        outcome = await resolver.resolve(body.instagramUrl, request_id=request_id)
    except InvalidURLError as e:
        raise invalid_url(str(e))

    # Read back by LoggingMiddleware for the response log line
    request.state.resolution = outcome

    if outcome.success:
        return FetchVideoSuccess.from_outcome(outcome)
    return FetchVideoFallback.from_outcome(outcome)


__all__ = ["router"]
