"""
Layer 02 Internal Test Fixtures.

These fixtures support isolated tests with mocked dependencies.
"""

import asyncio

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from core.config import Configuration

_real_sleep = asyncio.sleep


# =============================================================================
# Virtual Clock
# =============================================================================

class _TimerHandle:
    def __init__(self, when: float, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class VirtualClock:
    """
    Replaces asyncio.sleep and loop.call_later with a simulated clock.

    Each sleep advances virtual time by its delay and fires due timers, so
    polling intervals of seconds complete instantly.
    """

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []
        self.timers: list[_TimerHandle] = []

    def call_later(self, delay, callback, *args, **kwargs):
        handle = _TimerHandle(self.now + delay, callback, args)
        self.timers.append(handle)
        return handle

    async def sleep(self, delay, result=None):
        self.sleeps.append(delay)
        self.now += delay

        for handle in list(self.timers):
            if not handle.cancelled and handle.when <= self.now:
                self.timers.remove(handle)
                handle.callback(*handle.args)

        await _real_sleep(0)
        return result


@pytest_asyncio.fixture
async def virtual_clock(monkeypatch):
    """Simulated time for polling and timeout tests."""
    clock = VirtualClock()
    loop = asyncio.get_running_loop()
    monkeypatch.setattr(asyncio, "sleep", clock.sleep)
    monkeypatch.setattr(loop, "call_later", clock.call_later)
    yield clock


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_scans():
    """Mock Scans API for controller tests."""
    mock = MagicMock()
    mock.create_scan = AsyncMock(return_value="roMq1UVuhPKkndLERNKnA8")
    mock.get_scan = AsyncMock()
    mock.list_issues = AsyncMock(return_value=[])
    mock.stop_scan = AsyncMock()
    mock.delete_scan = AsyncMock()
    return mock


@pytest.fixture
def mock_dispatcher():
    """Mock CommandDispatcher."""
    mock = MagicMock()
    mock.execute = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_bus():
    """Mock EventBus for repeater tests."""
    mock = MagicMock()
    mock.init = AsyncMock()
    mock.execute = AsyncMock(return_value={"version": "0.1.0"})
    mock.publish = AsyncMock()
    mock.register = AsyncMock()
    mock.destroy = AsyncMock()
    return mock


@pytest.fixture
def mock_redis():
    """Mock Redis client for bus tests."""
    mock = MagicMock()
    mock.ping = MagicMock(return_value=True)
    mock.lpush = MagicMock(return_value=1)
    mock.brpop = MagicMock(return_value=None)
    mock.delete = MagicMock(return_value=1)
    mock.close = MagicMock()
    return mock


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def configuration():
    """Client configuration for tests."""
    return Configuration(hostname="app.example.com", api_key="test-key")

