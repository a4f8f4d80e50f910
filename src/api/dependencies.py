"""
InstaVault - API Dependencies
=============================

FastAPI dependency injection utilities.
"""

from fastapi import Request

from src.services.resolver import ResolverService


def get_resolver(request: Request) -> ResolverService:
    """Resolver attached to the application by create_app."""
    return request.app.state.resolver


__all__ = ["get_resolver"]
