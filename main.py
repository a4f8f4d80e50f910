"""
InstaVault - Entry Point
========================

Main entry point for the backend.
"""

import asyncio
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

load_dotenv()

from src.api import APIService
from src.core.logger import logger


async def main():
    """Main entry point."""
    api = APIService()

    try:
        await api.start()
        await api.wait()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    finally:
        await api.stop()


if __name__ == "__main__":
    asyncio.run(main())
