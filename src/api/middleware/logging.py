"""
InstaVault - Logging Middleware
===============================

Request/response logging for API monitoring.

Every logged request gets an 8-character ID, returned as ``X-Request-ID``
and passed to the resolver so its per-service log lines can be matched to
the API call. ``/fetch-video`` responses are summarised with the service
that answered, or the services tried when the rotation was exhausted.
"""

import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.logger import logger
from src.services.resolver import ResolutionOutcome


Items = list[tuple[str, str]]


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for request/response logging.

    Features:
    - Request ID generation and tracking
    - Request timing
    - Resolution summary for /fetch-video
    - Error logging
    """

    # Paths to skip logging entirely (high-frequency, low-value)
    SKIP_PATHS = {
        "/health",
    }

    # Path prefixes to skip
    SKIP_PREFIXES = (
        "/favicon.ico",
        "/robots.txt",
    )

    RESOLVE_PATH = "/fetch-video"

    SLOW_REQUEST_MS = 3000
    # Resolution walks several remote services, so only flag really slow ones
    SLOW_RESOLVE_MS = 15000

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self.SKIP_PATHS or path.startswith(self.SKIP_PREFIXES):
            return await call_next(request)

        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        method = request.method
        client_ip = self._get_client_ip(request)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error("API Error", [
                ("ID", request_id),
                ("Method", method),
                ("Path", path[:50]),
                ("Error", str(e)[:50]),
                ("Duration", f"{duration_ms:.0f}ms"),
            ])
            raise

        duration_ms = (time.time() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id

        status = response.status_code
        log_data = [
            ("ID", request_id),
            ("Method", method),
            ("Path", path[:50]),
            ("Status", str(status)),
            ("Duration", f"{duration_ms:.0f}ms"),
            ("IP", client_ip),
        ]

        if status >= 500:
            logger.error("API Response", log_data)
            return response
        if status >= 400:
            logger.warning("API Response", log_data)
            return response

        outcome: Optional[ResolutionOutcome] = getattr(request.state, "resolution", None)
        if path == self.RESOLVE_PATH and outcome is not None:
            self._log_resolution(outcome, log_data, duration_ms)
        elif duration_ms > self.SLOW_REQUEST_MS:
            logger.warning("API Response (Slow)", log_data)
        else:
            logger.debug("API Response", log_data)

        return response

    def _log_resolution(
        self,
        outcome: ResolutionOutcome,
        log_data: Items,
        duration_ms: float,
    ) -> None:
        """One line per /fetch-video call: who answered, or who was tried."""
        if outcome.success and outcome.result is not None:
            log_data.append(("Source", outcome.result.source))
            log_data.append(("Attempts", str(len(outcome.attempts))))
        else:
            log_data.append(("Tried", ", ".join(outcome.tried) or "None"))
            log_data.append(("Fallback Links", str(len(outcome.fallback))))

        if duration_ms > self.SLOW_RESOLVE_MS:
            logger.warning("Fetch Video Response (Slow)", log_data)
        elif outcome.success:
            logger.success("Fetch Video Response", log_data)
        else:
            logger.warning("Fetch Video Exhausted", log_data)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, considering proxies."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host
        return "unknown"


__all__ = ["LoggingMiddleware"]
