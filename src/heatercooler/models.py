"""Data models for device state, characteristic ranges, and wire parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict

from .const import (
    Active,
    CurrentHeaterCoolerState,
    TargetHeaterCoolerState,
    TemperatureDisplayUnits,
)

# ---------------------------------------------------------------------------
# Wire TypedDicts — query parameters of the sync request
# ---------------------------------------------------------------------------


class _WireParametersRequired(TypedDict):
    power: int
    fan: int


class WireParameters(_WireParametersRequired, total=False):
    """Query parameters sent to the appliance.

    mode and temp are absent when the target state is neither
    COOL nor HEAT.
    """

    mode: int
    temp: int


# ---------------------------------------------------------------------------
# State dataclasses
# ---------------------------------------------------------------------------


@dataclass
class DeviceState:
    """Desired state of the appliance as presented to the platform."""

    active: Active = Active.INACTIVE
    current_heater_cooler_state: CurrentHeaterCoolerState = (
        CurrentHeaterCoolerState.INACTIVE
    )
    target_heater_cooler_state: TargetHeaterCoolerState = (
        TargetHeaterCoolerState.COOL
    )
    rotation_speed: int = 2
    current_temperature: float = 25
    cooling_threshold_temperature: int = 25
    heating_threshold_temperature: int = 25
    temperature_display_units: TemperatureDisplayUnits = (
        TemperatureDisplayUnits.CELSIUS
    )


@dataclass(frozen=True)
class CharacteristicProps:
    """Range configuration the platform enforces before writing a value."""

    min_value: float
    max_value: float
    min_step: float = 1
    valid_values: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        if self.min_step <= 0:
            raise ValueError(f"min_step must be positive, got {self.min_step}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CharacteristicProps:
        """Build from platform vocabulary (minValue, maxValue, ...)."""
        valid = data.get("validValues")
        return cls(
            min_value=data["minValue"],
            max_value=data["maxValue"],
            min_step=data.get("minStep", 1),
            valid_values=tuple(valid) if valid is not None else None,
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the props in platform vocabulary."""
        props: dict[str, Any] = {
            "minValue": self.min_value,
            "maxValue": self.max_value,
            "minStep": self.min_step,
        }
        if self.valid_values is not None:
            props["validValues"] = list(self.valid_values)
        return props

    def accepts(self, value: float) -> bool:
        """Return True if value is within range, on a step, and allowed."""
        if self.valid_values is not None and value not in self.valid_values:
            return False
        if not self.min_value <= value <= self.max_value:
            return False
        steps = (value - self.min_value) / self.min_step
        return abs(steps - round(steps)) < 1e-9
