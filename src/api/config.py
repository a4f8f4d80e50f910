"""
InstaVault - API Configuration
==============================

Centralized configuration for the FastAPI service.
"""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_CORS_ORIGINS = (
    "https://instavault.vercel.app",
    "http://localhost:3000",
    "http://localhost:5173",
)


@dataclass(frozen=True)
class APIConfig:
    """API configuration settings."""

    # Server
    host: str = "0.0.0.0"
    port: int = 10000
    debug: bool = False

    # CORS
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    # Deployment flag echoed by GET /
    deployed: bool = True


def _load_cors_origins() -> tuple[str, ...]:
    value = os.getenv("INSTAVAULT_CORS_ORIGINS", "")
    origins = tuple(x.strip() for x in value.split(",") if x.strip())
    return origins or DEFAULT_CORS_ORIGINS


def _load_port() -> int:
    # Hosting platforms (Render, Railway) inject PORT
    value = os.getenv("PORT") or os.getenv("INSTAVAULT_API_PORT") or "10000"
    try:
        return int(value)
    except ValueError:
        return 10000


def load_api_config() -> APIConfig:
    """Load API configuration from environment."""
    return APIConfig(
        host=os.getenv("INSTAVAULT_API_HOST", "0.0.0.0"),
        port=_load_port(),
        debug=os.getenv("INSTAVAULT_API_DEBUG", "false").lower() == "true",
        cors_origins=_load_cors_origins(),
    )


# Singleton instance
_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the API configuration singleton."""
    global _config
    if _config is None:
        _config = load_api_config()
    return _config


__all__ = ["APIConfig", "DEFAULT_CORS_ORIGINS", "get_api_config", "load_api_config"]
