"""Debounced synchronization of the state mirror to the appliance."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .const import StateKey
    from .store import DeviceStateStore
    from .transport import Transport

from .const import (
    DEBOUNCE_DELAY,
    SYNC_PATH,
    WIRE_MODE_COOL,
    WIRE_MODE_HEAT,
    Active,
    TargetHeaterCoolerState,
)
from .exceptions import SyncTransportError
from .models import DeviceState, WireParameters

_LOGGER = logging.getLogger(__name__)


def build_wire_parameters(state: DeviceState) -> WireParameters:
    """
    Map the device state onto the appliance's query parameters.

    COOL selects mode 1 with the cooling threshold, HEAT selects mode 2
    with the heating threshold. Any other target leaves mode and temp
    out of the request.
    """
    params: WireParameters = {
        "power": 1 if state.active == Active.ACTIVE else 0,
        "fan": state.rotation_speed,
    }
    if state.target_heater_cooler_state == TargetHeaterCoolerState.COOL:
        params["mode"] = WIRE_MODE_COOL
        params["temp"] = state.cooling_threshold_temperature
    elif state.target_heater_cooler_state == TargetHeaterCoolerState.HEAT:
        params["mode"] = WIRE_MODE_HEAT
        params["temp"] = state.heating_threshold_temperature
    else:
        _LOGGER.warning(
            "Target state %s is neither COOL nor HEAT; omitting mode and temp",
            state.target_heater_cooler_state,
        )
    return params


class SyncController:
    """
    Pushes the state mirror to the appliance, coalescing rapid changes.

    Every state change cancels the armed timer and arms a new one, so a
    burst of writes spaced closer than the delay produces a single
    request carrying the state after the last write. There is no
    maximum wait: a continuous stream of writes postpones the sync.

    Requests run as background tasks and are never awaited by the
    writer. A failed request is logged and not retried; the next state
    change will send fresh parameters.
    """

    def __init__(
        self,
        store: DeviceStateStore,
        transport: Transport,
        *,
        delay: float = DEBOUNCE_DELAY,
        path: str = SYNC_PATH,
    ) -> None:
        self._store = store
        self._transport = transport
        self._delay = delay
        self._path = path
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._unsubscribe = store.add_listener(self.on_state_changed)

    @property
    def delay(self) -> float:
        """Return the debounce window in seconds."""
        return self._delay

    @property
    def pending(self) -> bool:
        """Return True if a sync is scheduled but has not fired yet."""
        return self._timer is not None

    def wire_parameters(self) -> WireParameters:
        """Return the parameters for the current state."""
        return build_wire_parameters(self._store.snapshot())

    def on_state_changed(self, key: StateKey, value: Any) -> None:
        """Re-arm the debounce timer after a state change."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _LOGGER.warning(
                "%s changed to %s outside the event loop; sync skipped", key, value
            )
            return
        _LOGGER.debug(
            "%s changed to %s, sync scheduled with %s",
            key,
            value,
            self.wire_parameters(),
        )
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self._delay, self.flush_sync)

    def flush_sync(self) -> asyncio.Task[None]:
        """Send the freshest parameters in a background task."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        params = self.wire_parameters()
        _LOGGER.debug("Synchronizing parameters %s", params)
        task = asyncio.get_running_loop().create_task(self._send(params))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _send(self, params: WireParameters) -> None:
        try:
            await self._transport.get(self._path, params)
        except SyncTransportError as exc:
            _LOGGER.warning("Synchronization failed: %s", exc)
        except Exception:
            _LOGGER.exception("Unexpected error during synchronization")

    async def close(self) -> None:
        """Cancel a scheduled sync and wait for in-flight requests."""
        self._unsubscribe()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._tasks:
            await asyncio.gather(*self._tasks)
