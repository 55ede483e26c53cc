"""Shared fixtures for heatercooler tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from heatercooler.accessory import HeaterCoolerAccessory, initial_state
from heatercooler.config import HeaterCoolerConfig
from heatercooler.exceptions import SyncTransportError
from heatercooler.store import DeviceStateStore
from heatercooler.sync import SyncController

TEST_DELAY = 0.02


class FakeTransport:
    """Transport double that records every request."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.error = error

    async def get(self, path: str, params: Any) -> None:
        self.calls.append((path, dict(params)))
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        pass


async def wait_for_sync(delay: float = TEST_DELAY) -> None:
    """Sleep past the debounce window and let request tasks finish."""
    await asyncio.sleep(delay * 5)


@pytest.fixture
def store() -> DeviceStateStore:
    """Return a store holding the startup state of a Celsius accessory."""
    return DeviceStateStore(initial_state(HeaterCoolerConfig()))


@pytest.fixture
def transport() -> FakeTransport:
    """Return a recording transport."""
    return FakeTransport()


@pytest.fixture
def failing_transport() -> FakeTransport:
    """Return a transport whose requests always fail."""
    return FakeTransport(SyncTransportError("connection refused"))


@pytest.fixture
def controller(store: DeviceStateStore, transport: FakeTransport) -> SyncController:
    """Return a controller with a short debounce window."""
    return SyncController(store, transport, delay=TEST_DELAY)


@pytest.fixture
def accessory(transport: FakeTransport) -> HeaterCoolerAccessory:
    """Return an accessory wired to a recording transport."""
    return HeaterCoolerAccessory(transport=transport, delay=TEST_DELAY)
