"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from kvcache_infra.cache.client import CacheClient
from kvcache_infra.cache.memory_transport import InMemoryTransport
from tests.mocks.mock_settings import make_settings
from tests.mocks.mock_transport import make_mock_transport


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def memory_transport(clock: FakeClock) -> InMemoryTransport:
    """Return an in-memory transport driven by the fake clock."""
    return InMemoryTransport(now_provider=clock)


@pytest.fixture
def memory_client(memory_transport: InMemoryTransport) -> CacheClient:
    """Return a CacheClient over the in-memory transport."""
    return CacheClient(memory_transport)


@pytest.fixture
def mock_transport() -> MagicMock:
    """Return a mock transport with recorded event handlers."""
    return make_mock_transport()
