import dataclasses
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.config import Config
from src.services.resolver import ResolverService

from fakes import FakeHTTP, FakeSession, TEST_SERVICES


@pytest.fixture
def settings() -> Config:
    return Config(
        REQUEST_TIMEOUT=10.0,
        RETRY_DELAY=0.0,
        COBALT_URL="",
        ACCEPTED_DOMAINS=("instagram.com",),
    )


@pytest.fixture
def make_resolver(settings):
    """Build a resolver over TEST_SERVICES answering from a FakeSession."""

    def _make(responses=None, services=TEST_SERVICES, **overrides):
        session = FakeSession(responses)
        resolver = ResolverService(
            services=services,
            http=FakeHTTP(session),
            settings=dataclasses.replace(settings, **overrides),
        )
        return resolver, session

    return _make
