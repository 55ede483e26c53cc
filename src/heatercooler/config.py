"""Accessory configuration: defaults, deep merge, and file loading."""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

import orjson

from .const import DEFAULT_ENDPOINT, DEFAULT_NAME, StateKey
from .exceptions import ConfigError
from .models import CharacteristicProps

_LOGGER = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "name": DEFAULT_NAME,
    "endpoint": DEFAULT_ENDPOINT,
    "celsius": True,
    "properties": {
        "rotationSpeed": {"minValue": 1, "maxValue": 3, "minStep": 1},
        "coolingThresholdTemperature": {
            "minValue": 17,
            "maxValue": 30,
            "minStep": 1,
        },
        "heatingThresholdTemperature": {
            "minValue": 17,
            "maxValue": 30,
            "minStep": 1,
        },
        "targetHeaterCoolerState": {
            "minValue": 0,
            "maxValue": 2,
            "minStep": 1,
            "validValues": [1, 2],
        },
    },
}

CONFIGURABLE_PROPERTIES = frozenset(DEFAULTS["properties"])


def _check_props(key: str, props: Any) -> None:
    """Reject props that would break range checks on write."""
    if not isinstance(props, dict):
        raise ConfigError(f"Properties for {key} must be an object")
    for name in ("minValue", "maxValue", "minStep"):
        value = props.get(name)
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ConfigError(f"{key}.{name} must be a number, got {value!r}")
    if props["minStep"] <= 0:
        raise ConfigError(f"{key}.minStep must be positive")
    if props["minValue"] > props["maxValue"]:
        raise ConfigError(f"{key}.minValue exceeds maxValue")
    valid = props.get("validValues")
    if valid is not None and (
        not isinstance(valid, list)
        or any(isinstance(v, bool) or not isinstance(v, int) for v in valid)
    ):
        raise ConfigError(f"{key}.validValues must be a list of integers")


def merge_deep(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return base with override merged in.

    Nested mappings are merged key by key; any other value in override
    replaces the one in base. Neither argument is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_deep(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass(frozen=True)
class HeaterCoolerConfig:
    """Static configuration for one accessory."""

    name: str = DEFAULT_NAME
    endpoint: str = DEFAULT_ENDPOINT
    celsius: bool = True
    properties: dict[StateKey, CharacteristicProps] = field(
        default_factory=lambda: {
            StateKey(key): CharacteristicProps.from_dict(props)
            for key, props in DEFAULTS["properties"].items()
        }
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeaterCoolerConfig:
        """
        Build a config from user data merged over DEFAULTS.

        Raises:
            ConfigError: If a property is not configurable or malformed.

        """
        overrides = data.get("properties") or {}
        if not isinstance(overrides, dict):
            raise ConfigError("properties must be an object")
        unknown = set(overrides) - CONFIGURABLE_PROPERTIES
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ConfigError(f"Unsupported properties: {names}")
        merged = merge_deep(DEFAULTS, data)
        if not isinstance(merged["celsius"], bool):
            raise ConfigError(
                f"celsius must be true or false, got {merged['celsius']!r}"
            )
        for key, props in merged["properties"].items():
            _check_props(key, props)
        properties = {
            StateKey(key): CharacteristicProps.from_dict(props)
            for key, props in merged["properties"].items()
        }
        return cls(
            name=str(merged["name"]),
            endpoint=str(merged["endpoint"]),
            celsius=merged["celsius"],
            properties=properties,
        )


async def load_config(path: Path) -> HeaterCoolerConfig:
    """
    Load a JSON config file.

    Raises:
        ConfigError: If the file is missing, not JSON, or invalid.

    """
    loop = asyncio.get_running_loop()
    data = await loop.run_in_executor(None, _load_config_sync, path)
    _LOGGER.debug("Loaded config from %s", path)
    return HeaterCoolerConfig.from_dict(data)


def _load_config_sync(path: Path) -> dict[str, Any]:
    """Synchronous config file read."""
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except orjson.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a JSON object")
    return data
