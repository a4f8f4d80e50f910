"""
InstaVault - Shared Constants
=============================

Centralized constants for the entire codebase.
Import from here instead of defining locally.
"""

from datetime import timezone


# =============================================================================
# Identity
# =============================================================================

APP_NAME = "InstaVault"
APP_VERSION = "2.0.0"


# =============================================================================
# Timezone
# =============================================================================

TIMEZONE = timezone.utc


# =============================================================================
# Outbound Request Headers
# =============================================================================

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
JSON_ACCEPT = "application/json"


# =============================================================================
# Example Input
# =============================================================================

EXAMPLE_INSTAGRAM_URL = "https://www.instagram.com/reel/C1qN2wXsjJG/"
TEST_INSTAGRAM_URL = "https://www.instagram.com/p/Cz8BWKavX7Z/"
