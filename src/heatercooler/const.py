"""Constants and enums for the heater/cooler bridge."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Active(IntEnum):
    """Power state of the appliance."""

    INACTIVE = 0
    ACTIVE = 1


class CurrentHeaterCoolerState(IntEnum):
    """Operating state reported to the platform (never synced)."""

    INACTIVE = 0
    IDLE = 1
    HEATING = 2
    COOLING = 3


class TargetHeaterCoolerState(IntEnum):
    """
    Requested operating mode.

    AUTO exists in the platform vocabulary but is excluded by the
    default characteristic configuration.
    """

    AUTO = 0
    HEAT = 1
    COOL = 2


class TemperatureDisplayUnits(IntEnum):
    """Temperature display units."""

    CELSIUS = 0
    FAHRENHEIT = 1


class StateKey(StrEnum):
    """Field identifiers, using the platform's key vocabulary."""

    ACTIVE = "active"
    CURRENT_HEATER_COOLER_STATE = "currentHeaterCoolerState"
    TARGET_HEATER_COOLER_STATE = "targetHeaterCoolerState"
    ROTATION_SPEED = "rotationSpeed"
    CURRENT_TEMPERATURE = "currentTemperature"
    COOLING_THRESHOLD_TEMPERATURE = "coolingThresholdTemperature"
    HEATING_THRESHOLD_TEMPERATURE = "heatingThresholdTemperature"
    TEMPERATURE_DISPLAY_UNITS = "temperatureDisplayUnits"


# Wire protocol mode values
WIRE_MODE_COOL = 1
WIRE_MODE_HEAT = 2

DEFAULT_ENDPOINT = "http://localhost:1337"
DEFAULT_NAME = "Heater Cooler"
MANUFACTURER = "eo"
MODEL = "HTTP Heater Cooler"
SYNC_PATH = "/remote"
DEBOUNCE_DELAY = 0.5  # seconds of quiet before a sync fires
REQUEST_TIMEOUT = 5  # seconds
