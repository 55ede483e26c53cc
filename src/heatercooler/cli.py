"""Command-line interface for manual heater/cooler control."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Any

from .accessory import HeaterCoolerAccessory
from .config import HeaterCoolerConfig, load_config
from .const import (
    DEFAULT_ENDPOINT,
    Active,
    CurrentHeaterCoolerState,
    StateKey,
    TargetHeaterCoolerState,
    TemperatureDisplayUnits,
)
from .exceptions import HeaterCoolerError
from .store import resolve_key

_LOGGER = logging.getLogger(__name__)

_ENUM_TYPES: dict[StateKey, type[IntEnum]] = {
    StateKey.ACTIVE: Active,
    StateKey.CURRENT_HEATER_COOLER_STATE: CurrentHeaterCoolerState,
    StateKey.TARGET_HEATER_COOLER_STATE: TargetHeaterCoolerState,
    StateKey.TEMPERATURE_DISPLAY_UNITS: TemperatureDisplayUnits,
}


def _format_value(value: Any) -> str:
    if isinstance(value, IntEnum):
        return f"{value.name} ({int(value)})"
    return str(value)


def _print_state(accessory: HeaterCoolerAccessory) -> None:
    """Display the mirror and the parameters the next sync will send."""
    print(f"\n--- {accessory.name} ---")
    for key in StateKey:
        print(f"  {key}: {_format_value(accessory.get(key))}")
    params = accessory.controller.wire_parameters()
    print(f"  Next sync: {params}")
    print(f"  Sync pending: {'yes' if accessory.controller.pending else 'no'}")
    print("------------------------\n")


def _print_help() -> None:
    """Display available commands."""
    print("Commands:")
    print("  status                      Show accessory state")
    print("  get <key>                   Show one characteristic")
    print("  set <key> <value>           Write a characteristic")
    print("  on | off                    Set power")
    print("  cool [temp]                 Cool, optionally at temp")
    print("  heat [temp]                 Heat, optionally at temp")
    print("  fan <speed>                 Set fan speed")
    print("  quit                        Exit")
    print(f"Keys: {', '.join(StateKey)}")


def _parse_value(key: StateKey, raw: str) -> Any:
    """
    Convert user input into a characteristic value.

    Enum characteristics accept a member name or its number.

    Raises:
        ValueError: If raw is not valid for the characteristic.

    """
    enum_type = _ENUM_TYPES.get(key)
    if enum_type is not None:
        try:
            return enum_type[raw.upper()]
        except KeyError:
            return enum_type(int(raw))
    if key is StateKey.CURRENT_TEMPERATURE:
        return float(raw)
    return int(raw)


def _write(accessory: HeaterCoolerAccessory, key: StateKey, raw: str) -> None:
    """Validate input against the configured range and write it."""
    try:
        value = _parse_value(key, raw)
    except ValueError:
        print(f"Invalid value for {key}: {raw}")
        return
    props = accessory.config.properties.get(key)
    if props is not None and not props.accepts(value):
        print(f"{key} must satisfy {props.as_dict()}")
        return
    try:
        accessory.set(key, value)
    except HeaterCoolerError as exc:
        print(f"Write rejected: {exc}")
        return
    print(f"Set {key} to {_format_value(value)}")


def _cmd_mode(
    accessory: HeaterCoolerAccessory,
    mode: TargetHeaterCoolerState,
    parts: list[str],
) -> None:
    """Handle the cool and heat commands."""
    _write(accessory, StateKey.TARGET_HEATER_COOLER_STATE, mode.name)
    if len(parts) >= 2:
        key = (
            StateKey.COOLING_THRESHOLD_TEMPERATURE
            if mode is TargetHeaterCoolerState.COOL
            else StateKey.HEATING_THRESHOLD_TEMPERATURE
        )
        _write(accessory, key, parts[1])


def _handle_command(accessory: HeaterCoolerAccessory, parts: list[str]) -> bool:
    """Handle a single interactive command.

    Returns False when the user asked to quit.
    """
    if parts[0] in ("quit", "q"):
        return False

    if parts[0] == "status":
        _print_state(accessory)

    elif parts[0] in ("get", "set") and len(parts) >= 2:
        try:
            key = resolve_key(parts[1])
        except HeaterCoolerError:
            print(f"Unknown key: {parts[1]}")
            return True
        if parts[0] == "get":
            print(f"{key}: {_format_value(accessory.get(key))}")
        elif len(parts) >= 3:
            _write(accessory, key, parts[2])
        else:
            print("Usage: set <key> <value>")

    elif parts[0] in ("on", "off"):
        _write(accessory, StateKey.ACTIVE, "active" if parts[0] == "on" else "inactive")

    elif parts[0] == "cool":
        _cmd_mode(accessory, TargetHeaterCoolerState.COOL, parts)

    elif parts[0] == "heat":
        _cmd_mode(accessory, TargetHeaterCoolerState.HEAT, parts)

    elif parts[0] == "fan" and len(parts) >= 2:
        _write(accessory, StateKey.ROTATION_SPEED, parts[1])

    elif parts[0] in ("help", "?"):
        _print_help()

    else:
        print("Unknown command. Type 'help' for available commands.")

    return True


async def _do_control(config: HeaterCoolerConfig) -> None:
    """Run the interactive command loop until quit or end of input."""
    accessory = HeaterCoolerAccessory(config)
    _LOGGER.debug("Starting control with %s", config)
    print(f"\n=== {accessory.name} ===")
    print(f"Synchronizing to {config.endpoint}\n")
    _print_help()
    print()

    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            parts = line.split()
            if not parts:
                continue
            # Keys are camelCase, so only the command word is case-folded
            parts[0] = parts[0].lower()
            if not _handle_command(accessory, parts):
                break
    except KeyboardInterrupt:
        pass
    finally:
        await accessory.close()

    print("\nStopped.")


async def _run(args: argparse.Namespace) -> None:
    """Build the config from the command line and start control."""
    try:
        config = (
            await load_config(Path(args.config)) if args.config else HeaterCoolerConfig()
        )
    except HeaterCoolerError as exc:
        print(f"Configuration error: {exc}")
        return
    overrides = {
        name: value
        for name, value in (("endpoint", args.endpoint), ("name", args.name))
        if value is not None
    }
    if overrides:
        config = dataclasses.replace(config, **overrides)
    await _do_control(config)


def main() -> None:
    """Entry point for the heatercooler CLI."""
    parser = argparse.ArgumentParser(description="HTTP Heater Cooler control CLI")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument(
        "--endpoint",
        help=f"Appliance base URL (default: {DEFAULT_ENDPOINT})",
    )
    parser.add_argument("--name", help="Accessory display name")
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    asyncio.run(_run(args))
