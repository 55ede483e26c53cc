"""In-memory mirror of the appliance's desired state."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

from .const import StateKey
from .exceptions import UnknownKeyError, UnsupportedWriteError
from .models import DeviceState

_LOGGER = logging.getLogger(__name__)

_FIELDS: dict[StateKey, str] = {
    StateKey.ACTIVE: "active",
    StateKey.CURRENT_HEATER_COOLER_STATE: "current_heater_cooler_state",
    StateKey.TARGET_HEATER_COOLER_STATE: "target_heater_cooler_state",
    StateKey.ROTATION_SPEED: "rotation_speed",
    StateKey.CURRENT_TEMPERATURE: "current_temperature",
    StateKey.COOLING_THRESHOLD_TEMPERATURE: "cooling_threshold_temperature",
    StateKey.HEATING_THRESHOLD_TEMPERATURE: "heating_threshold_temperature",
    StateKey.TEMPERATURE_DISPLAY_UNITS: "temperature_display_units",
}

READ_ONLY_KEYS = frozenset({StateKey.TEMPERATURE_DISPLAY_UNITS})


def resolve_key(key: str) -> StateKey:
    """Map a platform key onto the closed set of fields."""
    try:
        return StateKey(key)
    except ValueError:
        raise UnknownKeyError(f"Unknown state key: {key!r}") from None


class DeviceStateStore:
    """
    Owner of the DeviceState mirror.

    Values are stored as given: range checks are the writer's job.
    Every accepted write notifies the registered listeners with the
    key and new value.
    """

    def __init__(self, defaults: Mapping[str, Any]) -> None:
        keys = {resolve_key(key) for key in defaults}
        missing = set(StateKey) - keys
        if missing:
            names = ", ".join(sorted(missing))
            raise ValueError(f"Missing defaults for: {names}")
        self._state = DeviceState(
            **{_FIELDS[resolve_key(key)]: value for key, value in defaults.items()}
        )
        self._listeners: list[Callable[[StateKey, Any], None]] = []

    def get(self, key: str) -> Any:
        """Return the current value for key."""
        return getattr(self._state, _FIELDS[resolve_key(key)])

    def set(self, key: str, value: Any) -> None:
        """
        Overwrite a field and notify listeners.

        Raises:
            UnknownKeyError: If key is not a state field.
            UnsupportedWriteError: If the field is read-only.

        """
        state_key = resolve_key(key)
        if state_key in READ_ONLY_KEYS:
            raise UnsupportedWriteError(f"{state_key} is read-only")
        _LOGGER.debug("Setting %s to %s", state_key, value)
        setattr(self._state, _FIELDS[state_key], value)
        for listener in self._listeners:
            try:
                listener(state_key, value)
            except Exception:  # noqa: PERF203
                _LOGGER.exception("Error in state listener")

    def snapshot(self) -> DeviceState:
        """Return a copy of the current state."""
        return dataclasses.replace(self._state)

    def add_listener(
        self, listener: Callable[[StateKey, Any], None]
    ) -> Callable[[], None]:
        """Register a change listener. Returns a callable to unregister it."""
        self._listeners.append(listener)

        def _remove() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _remove
