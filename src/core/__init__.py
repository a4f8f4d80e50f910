"""
InstaVault - Core Package
=========================

Framework essentials: config, constants, and logging.
"""

from src.core.config import config
from src.core.logger import logger

__all__ = ["config", "logger"]
