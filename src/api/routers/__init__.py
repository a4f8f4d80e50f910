"""
InstaVault - API Routers
========================

Route handlers for the API.
"""

from .health import router as health_router
from .fetch import router as fetch_router
from .services import router as services_router

__all__ = [
    "health_router",
    "fetch_router",
    "services_router",
]
