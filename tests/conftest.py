# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- A controllable millisecond clock
- In-memory and fakeredis-backed session stores
- A transport that records payloads instead of sending them
"""

from concurrent.futures import Future

import fakeredis
import pytest

from analytics_tracker.base import BaseTransport
from analytics_tracker.core import PageContext
from analytics_tracker.infrastructure.storage import InMemorySessionStore, ValkeySessionStore

MINUTE_MS = 60 * 1000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class RecordingTransport(BaseTransport):
    """Transport that stores payloads and resolves immediately."""

    def __init__(self, result: bool = True):
        self.payloads: list[dict] = []
        self.result = result
        self.closed = False

    def send(self, payload: dict) -> "Future[bool]":
        if self.closed:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.payloads.append(payload)
        future: Future[bool] = Future()
        future.set_result(self.result)
        return future

    def close(self) -> None:
        self.closed = True


class FailingStore(InMemorySessionStore):
    """Session store whose reads and/or writes raise, like disabled storage."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key: str) -> str | None:
        if self.fail_get:
            raise OSError("storage disabled")
        return super().get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if self.fail_set:
            raise OSError("storage disabled")
        super().set(key, value, ttl_seconds)


@pytest.fixture()
def clock():
    """A FakeClock starting at a realistic epoch millisecond value."""
    return FakeClock(start=1_700_000_000_000)


@pytest.fixture()
def memory_store(clock):
    """An InMemorySessionStore driven by the fake clock."""
    return InMemorySessionStore(clock=clock)


@pytest.fixture()
def fake_redis():
    """A clean fakeredis instance for each test.

    Uses decode_responses=True to match the real Valkey client behavior.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.flushall()
    client.close()


@pytest.fixture()
def valkey_store(fake_redis):
    """A ValkeySessionStore backed by fakeredis."""
    return ValkeySessionStore(client=fake_redis, key_prefix="test:")


@pytest.fixture()
def transport():
    """A RecordingTransport that accepts every event."""
    return RecordingTransport()


@pytest.fixture()
def page():
    """A scrollable page."""
    return PageContext(
        url="https://shop.example.com/pricing",
        title="Pricing",
        referrer="https://search.example.com/",
        scroll_y=450,
        scroll_height=2000,
        viewport_height=800,
    )
