"""Shared fixtures: fake clock, mocked HTTP session, service and app."""
from unittest.mock import MagicMock

import pytest
import requests

from app import create_app
from services.cache_store import TLECacheStore
from services.source_registry import SourceRegistry
from services.tle_service import SatelliteDataService
from tle_samples import STATIONS_FEED, TEST_BASE_URL, make_response

# 2024-01-01T00:00:00Z in ms
START_MS = 1704067200000


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now=START_MS):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.get.return_value = make_response(STATIONS_FEED)
    return session


@pytest.fixture
def registry():
    return SourceRegistry(TEST_BASE_URL)


@pytest.fixture
def cache():
    return TLECacheStore()


@pytest.fixture
def service(registry, cache, session, clock):
    return SatelliteDataService(
        registry=registry,
        cache=cache,
        session=session,
        clock=clock,
        fetch_timeout=5,
    )


@pytest.fixture
def app(service):
    return create_app('testing', tle_service=service)


@pytest.fixture
def client(app):
    return app.test_client()
