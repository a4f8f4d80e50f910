"""
InstaVault - API Middleware
===========================

Request/response middleware for the API.
"""

from .logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
