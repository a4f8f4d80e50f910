"""
InstaVault - API Package
========================

FastAPI-based REST API in front of the downloader rotation resolver.

Features:
- POST /fetch-video resolves an Instagram URL to a media link
- Fallback manual-download links when every service fails
- Registry listing, manual test helper, health and info endpoints
- CORS restricted to configured origins

Usage:
    from src.api import APIService

    api_service = APIService()
    await api_service.start()
    await api_service.wait()

    # On shutdown
    await api_service.stop()

Standalone (for development):
    uvicorn src.api.app:app --reload --port 10000
"""

import asyncio
from typing import Optional

import uvicorn

from src.core.logger import logger
from src.api.config import get_api_config, APIConfig
from src.api.app import create_app
from src.services.resolver import ResolverService


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """Manages the uvicorn server lifecycle for the FastAPI app."""

    def __init__(self, resolver: Optional[ResolverService] = None) -> None:
        self._config = get_api_config()
        self._app = create_app(resolver)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Check if the API server is running."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the API server in a background task."""
        if self.is_running:
            logger.warning("API Already Running", [])
            return

        config = uvicorn.Config(
            app=self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="warning",  # Reduce uvicorn logging
            access_log=False,  # We have our own logging middleware
        )

        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._run_server())

        logger.tree("InstaVault API Ready", [
            ("Host", self._config.host),
            ("Port", str(self._config.port)),
            ("Endpoints", "/, /health, /services, /test, /fetch-video"),
            ("CORS Origins", ", ".join(self._config.cors_origins)),
        ], emoji="🌐")

    async def wait(self) -> None:
        """Block until the server exits (SIGINT/SIGTERM are handled by uvicorn)."""
        if self._task:
            await self._task

    async def _run_server(self) -> None:
        """Run the uvicorn server."""
        try:
            await self._server.serve()
        except asyncio.CancelledError:
            logger.debug("API Server Cancelled", [])
        except Exception as e:
            logger.error("API Server Error", [
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])

    async def stop(self) -> None:
        """Stop the API server gracefully."""
        if not self.is_running:
            return

        logger.tree("InstaVault API Stopping", [], emoji="🛑")

        # Signal server to stop
        if self._server:
            self._server.should_exit = True

        # Wait for task to complete
        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except asyncio.TimeoutError:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._server = None
        self._task = None

        logger.tree("InstaVault API Stopped", [
            ("Status", "Shutdown complete"),
        ], emoji="✅")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "APIService",
    "get_api_config",
    "APIConfig",
    "create_app",
]
