"""Bridge a HeaterCooler accessory to an HTTP-controlled appliance."""

__version__ = "1.0.0"

from .accessory import Characteristic, HeaterCoolerAccessory
from .config import HeaterCoolerConfig, load_config
from .const import (
    DEFAULT_ENDPOINT,
    Active,
    CurrentHeaterCoolerState,
    StateKey,
    TargetHeaterCoolerState,
    TemperatureDisplayUnits,
)
from .exceptions import (
    ConfigError,
    HeaterCoolerError,
    SyncTransportError,
    UnknownKeyError,
    UnsupportedWriteError,
)
from .models import CharacteristicProps, DeviceState, WireParameters
from .store import DeviceStateStore
from .sync import SyncController, build_wire_parameters
from .transport import HttpTransport

__all__ = [
    "DEFAULT_ENDPOINT",
    "Active",
    "Characteristic",
    "CharacteristicProps",
    "ConfigError",
    "CurrentHeaterCoolerState",
    "DeviceState",
    "DeviceStateStore",
    "HeaterCoolerAccessory",
    "HeaterCoolerConfig",
    "HeaterCoolerError",
    "HttpTransport",
    "StateKey",
    "SyncController",
    "SyncTransportError",
    "TargetHeaterCoolerState",
    "TemperatureDisplayUnits",
    "UnknownKeyError",
    "UnsupportedWriteError",
    "WireParameters",
    "build_wire_parameters",
    "load_config",
]
