"""
InstaVault - FastAPI Application
================================

FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND

from src.core.constants import APP_NAME, APP_VERSION, EXAMPLE_INSTAGRAM_URL
from src.core.logger import logger
from src.api.config import get_api_config
from src.api.errors import APIError, ErrorCode, error_response
from src.api.middleware.logging import LoggingMiddleware
from src.api.routers import fetch_router, health_router, services_router
from src.api.routers.health import ENDPOINTS, set_start_time
from src.services.resolver import ResolverService


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    # Startup
    set_start_time()
    resolver: ResolverService = app.state.resolver

    logger.tree("API Starting", [
        ("Version", APP_VERSION),
        ("Framework", "FastAPI"),
        ("Services", str(len(resolver.services))),
    ], emoji="🚀")

    yield

    # Shutdown
    await resolver.close()
    logger.tree("API Stopping", [], emoji="🛑")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(resolver: Optional[ResolverService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        resolver: Optional resolver (custom registry/session) for injection

    Returns:
        Configured FastAPI application
    """
    config = get_api_config()

    app = FastAPI(
        title=f"{APP_NAME} API",
        description="Instagram media link resolver backed by third-party downloaders",
        version=APP_VERSION,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
        openapi_url="/openapi.json" if config.debug else None,
        lifespan=lifespan,
    )

    app.state.resolver = resolver or ResolverService()

    # ==========================================================================
    # Middleware (order matters - last added = first executed)
    # ==========================================================================

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging
    app.add_middleware(LoggingMiddleware)

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle APIError exceptions with structured response."""
        logger.tree("API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Code", exc.error_code.value),
            ("Status", str(exc.status_code)),
        ], emoji="⚠️")
        return exc.to_response()

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed or missing JSON body."""
        fields = [
            ".".join(str(part) for part in error.get("loc", ()))
            for error in exc.errors()
        ]
        return error_response(
            ErrorCode.VALIDATION_FAILED,
            details={"fields": fields, "example": EXAMPLE_INSTAGRAM_URL},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes list what is available; other HTTP errors pass through."""
        if exc.status_code == HTTP_404_NOT_FOUND:
            return error_response(
                ErrorCode.ROUTE_NOT_FOUND,
                details={"available_endpoints": list(ENDPOINTS.values())},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error_tree("Unhandled API Error", exc, [
            ("Path", str(request.url.path)[:50]),
        ])
        return error_response(
            ErrorCode.SERVER_ERROR,
            details={"error": str(exc)},
        )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(health_router)
    app.include_router(services_router)
    app.include_router(fetch_router)

    return app


# =============================================================================
# Module-level app for uvicorn standalone
# =============================================================================

# This allows running with: uvicorn src.api.app:app
app = create_app()


__all__ = ["create_app", "app"]
