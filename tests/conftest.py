"""
Pytest configuration and fixtures.
Provides settings/app builders, an in-memory log sink and a scripted clock.
"""

from typing import List

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings


class CollectingSink:
    """Log sink that keeps every written line in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def write(self, message: str) -> None:
        self.lines.append(message)


class ScriptedClock:
    """Clock that returns pre-set readings in order."""

    def __init__(self, *readings: float):
        self.readings = list(readings)

    def __call__(self) -> float:
        return self.readings.pop(0)


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def scripted_clock():
    """Factory for a clock returning the given readings (in seconds)."""
    return ScriptedClock


@pytest.fixture
def make_settings():
    """
    Build Settings for a given runtime mode.
    Rate limiting is off unless a test turns it on.
    """
    def _make(environment: str = "development", **overrides) -> Settings:
        overrides.setdefault("RATE_LIMIT_ENABLED", False)
        return Settings(ENVIRONMENT=environment, **overrides)
    return _make


@pytest.fixture
def client_for():
    """Create an httpx AsyncClient bound to an ASGI app."""
    def _client(app, raise_app_exceptions: bool = True) -> AsyncClient:
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        return AsyncClient(transport=transport, base_url="http://test")
    return _client
