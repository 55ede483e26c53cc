"""Tests for the HeaterCooler accessory facade."""

from __future__ import annotations

import asyncio

import pytest

from heatercooler.accessory import HeaterCoolerAccessory, initial_state
from heatercooler.config import HeaterCoolerConfig
from heatercooler.const import (
    SYNC_PATH,
    Active,
    StateKey,
    TargetHeaterCoolerState,
    TemperatureDisplayUnits,
)
from heatercooler.exceptions import UnknownKeyError, UnsupportedWriteError
from heatercooler.transport import HttpTransport

from .conftest import FakeTransport, wait_for_sync

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_initial_state_celsius() -> None:
    state = initial_state(HeaterCoolerConfig())
    assert state[StateKey.TEMPERATURE_DISPLAY_UNITS] == TemperatureDisplayUnits.CELSIUS
    assert set(state) == set(StateKey)


def test_initial_state_fahrenheit() -> None:
    state = initial_state(HeaterCoolerConfig(celsius=False))
    assert (
        state[StateKey.TEMPERATURE_DISPLAY_UNITS]
        == TemperatureDisplayUnits.FAHRENHEIT
    )


def test_default_transport_uses_endpoint() -> None:
    accessory = HeaterCoolerAccessory(HeaterCoolerConfig(endpoint="http://10.0.0.7/"))
    transport = accessory._owned_transport
    assert isinstance(transport, HttpTransport)
    assert transport.base_url == "http://10.0.0.7"


def test_information(accessory: HeaterCoolerAccessory) -> None:
    assert accessory.information == {
        "manufacturer": "eo",
        "model": "HTTP Heater Cooler",
        "name": "Heater Cooler",
    }


def test_characteristics(accessory: HeaterCoolerAccessory) -> None:
    chars = {c.key: c for c in accessory.characteristics()}
    assert list(chars) == list(StateKey)
    assert chars[StateKey.ACTIVE].writable
    assert chars[StateKey.ACTIVE].props is None
    assert not chars[StateKey.CURRENT_TEMPERATURE].writable
    assert not chars[StateKey.TEMPERATURE_DISPLAY_UNITS].writable
    target = chars[StateKey.TARGET_HEATER_COOLER_STATE]
    assert target.writable
    assert target.props is not None
    assert target.props.as_dict()["validValues"] == [1, 2]
    speed = chars[StateKey.ROTATION_SPEED].props
    assert speed is not None
    assert (speed.min_value, speed.max_value, speed.min_step) == (1, 3, 1)


# ---------------------------------------------------------------------------
# Get / set
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "key",
    ["currentHeaterCoolerState", "currentTemperature", "temperatureDisplayUnits"],
)
def test_get_only_characteristics_reject_writes(
    accessory: HeaterCoolerAccessory, key: str
) -> None:
    before = accessory.get(key)
    with pytest.raises(UnsupportedWriteError):
        accessory.set(key, 1)
    assert accessory.get(key) == before


def test_unknown_characteristic(accessory: HeaterCoolerAccessory) -> None:
    with pytest.raises(UnknownKeyError):
        accessory.set("swingMode", 1)
    with pytest.raises(UnknownKeyError):
        accessory.get("swingMode")


async def test_set_returns_before_sync(
    accessory: HeaterCoolerAccessory, transport: FakeTransport
) -> None:
    accessory.set("coolingThresholdTemperature", 22)
    assert accessory.get("coolingThresholdTemperature") == 22
    assert transport.calls == []
    await accessory.close()


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


async def test_power_on_syncs_defaults(
    accessory: HeaterCoolerAccessory, transport: FakeTransport
) -> None:
    accessory.set("active", Active.ACTIVE)
    await wait_for_sync()
    assert transport.calls == [
        (SYNC_PATH, {"power": 1, "mode": 1, "temp": 25, "fan": 2})
    ]


async def test_fan_burst_syncs_last_value(
    accessory: HeaterCoolerAccessory, transport: FakeTransport
) -> None:
    accessory.set("rotationSpeed", 1)
    accessory.set("rotationSpeed", 3)
    accessory.set("rotationSpeed", 2)
    await wait_for_sync()
    assert len(transport.calls) == 1
    assert transport.calls[0][1]["fan"] == 2


async def test_switch_to_heat(
    accessory: HeaterCoolerAccessory, transport: FakeTransport
) -> None:
    accessory.set("active", Active.ACTIVE)
    accessory.set("targetHeaterCoolerState", TargetHeaterCoolerState.HEAT)
    accessory.set("heatingThresholdTemperature", 19)
    await wait_for_sync()
    assert transport.calls == [
        (SYNC_PATH, {"power": 1, "mode": 2, "temp": 19, "fan": 2})
    ]


async def test_failed_sync_keeps_mirror(
    failing_transport: FakeTransport,
) -> None:
    accessory = HeaterCoolerAccessory(transport=failing_transport, delay=0.01)
    accessory.set("active", Active.ACTIVE)
    await wait_for_sync()
    assert len(failing_transport.calls) == 1
    assert accessory.get("active") == Active.ACTIVE
    accessory.set("rotationSpeed", 3)
    assert accessory.get("rotationSpeed") == 3
    await accessory.close()


async def test_close_drops_pending_sync(
    accessory: HeaterCoolerAccessory, transport: FakeTransport
) -> None:
    accessory.set("active", Active.ACTIVE)
    await accessory.close()
    await asyncio.sleep(0.05)
    assert transport.calls == []


async def test_close_releases_owned_transport() -> None:
    accessory = HeaterCoolerAccessory()
    assert accessory._owned_transport is not None
    await accessory.close()
    assert accessory._owned_transport._session is None
