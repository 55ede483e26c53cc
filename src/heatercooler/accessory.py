"""HeaterCooler accessory exposed to the home-automation platform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .transport import Transport

from .config import HeaterCoolerConfig
from .const import (
    DEBOUNCE_DELAY,
    MANUFACTURER,
    MODEL,
    Active,
    CurrentHeaterCoolerState,
    StateKey,
    TargetHeaterCoolerState,
    TemperatureDisplayUnits,
)
from .exceptions import UnsupportedWriteError
from .models import CharacteristicProps
from .store import DeviceStateStore, resolve_key
from .sync import SyncController
from .transport import HttpTransport

# Characteristics the platform may write; the rest are get-only.
WRITABLE_KEYS = frozenset(
    {
        StateKey.ACTIVE,
        StateKey.TARGET_HEATER_COOLER_STATE,
        StateKey.ROTATION_SPEED,
        StateKey.COOLING_THRESHOLD_TEMPERATURE,
        StateKey.HEATING_THRESHOLD_TEMPERATURE,
    }
)


@dataclass(frozen=True)
class Characteristic:
    """Registration details for one characteristic."""

    key: StateKey
    writable: bool
    props: CharacteristicProps | None = None


def initial_state(config: HeaterCoolerConfig) -> dict[str, Any]:
    """Return the startup values of every state field."""
    return {
        StateKey.ACTIVE: Active.INACTIVE,
        StateKey.CURRENT_HEATER_COOLER_STATE: CurrentHeaterCoolerState.INACTIVE,
        StateKey.TARGET_HEATER_COOLER_STATE: TargetHeaterCoolerState.COOL,
        StateKey.ROTATION_SPEED: 2,
        StateKey.CURRENT_TEMPERATURE: 25,
        StateKey.COOLING_THRESHOLD_TEMPERATURE: 25,
        StateKey.HEATING_THRESHOLD_TEMPERATURE: 25,
        StateKey.TEMPERATURE_DISPLAY_UNITS: (
            TemperatureDisplayUnits.CELSIUS
            if config.celsius
            else TemperatureDisplayUnits.FAHRENHEIT
        ),
    }


class HeaterCoolerAccessory:
    """
    Platform-facing HeaterCooler service.

    Wires a DeviceStateStore to a SyncController and describes the
    characteristics the platform should register. Reads never touch
    the network; writes return as soon as the mirror is updated.
    """

    def __init__(
        self,
        config: HeaterCoolerConfig | None = None,
        *,
        transport: Transport | None = None,
        delay: float | None = None,
    ) -> None:
        self.config = config or HeaterCoolerConfig()
        self._owned_transport: HttpTransport | None = None
        if transport is None:
            transport = self._owned_transport = HttpTransport(self.config.endpoint)
        self.store = DeviceStateStore(initial_state(self.config))
        self.controller = SyncController(
            self.store,
            transport,
            delay=DEBOUNCE_DELAY if delay is None else delay,
        )

    @property
    def name(self) -> str:
        """Return the accessory display name."""
        return self.config.name

    @property
    def information(self) -> dict[str, str]:
        """Return the accessory information characteristics."""
        return {"manufacturer": MANUFACTURER, "model": MODEL, "name": self.name}

    def characteristics(self) -> list[Characteristic]:
        """Return every characteristic in registration order."""
        return [
            Characteristic(
                key=key,
                writable=key in WRITABLE_KEYS,
                props=self.config.properties.get(key),
            )
            for key in StateKey
        ]

    def get(self, key: str) -> Any:
        """Return the current value of a characteristic."""
        return self.store.get(key)

    def set(self, key: str, value: Any) -> None:
        """
        Write a characteristic.

        Raises:
            UnknownKeyError: If key is not a characteristic.
            UnsupportedWriteError: If the characteristic is get-only.

        """
        state_key = resolve_key(key)
        if state_key not in WRITABLE_KEYS:
            raise UnsupportedWriteError(f"{state_key} cannot be written")
        self.store.set(state_key, value)

    async def close(self) -> None:
        """Stop pending syncs and release the owned transport."""
        await self.controller.close()
        if self._owned_transport is not None:
            await self._owned_transport.close()
