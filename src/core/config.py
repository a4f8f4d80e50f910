"""
InstaVault - Configuration
==========================

Central configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


ROOT_DIR = Path(__file__).parent.parent.parent
LOGS_DIR = ROOT_DIR / "logs"

LOGS_DIR.mkdir(exist_ok=True)


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float with default."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_env_list(key: str, default: str = "") -> Tuple[str, ...]:
    """Get environment variable as a tuple of strings (comma-separated)."""
    value = os.getenv(key, default)
    if not value:
        return ()
    return tuple(x.strip() for x in value.split(",") if x.strip())


@dataclass(frozen=True)
class Config:
    """Resolver configuration from environment variables."""

    # Outbound requests
    REQUEST_TIMEOUT: float = field(
        default_factory=lambda: _get_env_float("INSTAVAULT_REQUEST_TIMEOUT", 10.0)
    )
    RETRY_DELAY: float = field(
        default_factory=lambda: _get_env_float("INSTAVAULT_RETRY_DELAY", 0.3)
    )

    # Self-hosted Cobalt instance, tried first when set
    COBALT_URL: str = field(
        default_factory=lambda: os.getenv("INSTAVAULT_COBALT_URL", "").strip()
    )

    # Input URLs must contain one of these markers (matched case-insensitively)
    ACCEPTED_DOMAINS: Tuple[str, ...] = field(
        default_factory=lambda: tuple(
            domain.lower() for domain in _get_env_list("INSTAVAULT_ACCEPTED_DOMAINS")
        ) or ("instagram.com",)
    )


config = Config()
