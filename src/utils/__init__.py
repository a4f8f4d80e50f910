"""InstaVault - Utils Package."""

from src.utils.http import HTTPSessionManager, http_session

__all__ = [
    "HTTPSessionManager",
    "http_session",
]
