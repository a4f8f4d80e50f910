"""
InstaVault - Services Router
============================

Registry listing and a canned manual-test request.
"""

import json

from fastapi import APIRouter, Depends

from src.api.config import get_api_config
from src.api.dependencies import get_resolver
from src.api.models.services import ManualTestResponse, ServiceInfo, ServicesResponse
from src.core.constants import TEST_INSTAGRAM_URL
from src.services.resolver import ResolverService


router = APIRouter(tags=["Services"])


@router.get("/services")
async def list_services(
    resolver: ResolverService = Depends(get_resolver),
) -> ServicesResponse:
    """Registered downloader services in trial order."""
    services = [ServiceInfo.from_descriptor(d) for d in resolver.services]
    return ServicesResponse(count=len(services), services=services)


@router.get("/test")
async def manual_test() -> ManualTestResponse:
    """Example URL and curl command for trying /fetch-video by hand."""
    port = get_api_config().port
    payload = json.dumps({"instagramUrl": TEST_INSTAGRAM_URL})
    return ManualTestResponse(
        testUrl=TEST_INSTAGRAM_URL,
        curlCommand=(
            f"curl -X POST http://localhost:{port}/fetch-video "
            f"-H \"Content-Type: application/json\" -d '{payload}'"
        ),
    )


__all__ = ["router"]
