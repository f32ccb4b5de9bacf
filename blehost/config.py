"""Sizing constants resolved from environment variables and feature flags."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

CONFIG_DEFAULTS: dict[str, int] = {
    "CONNECTION_EVENT_QUEUE_SIZE": 2,
    "L2CAP_RX_QUEUE_SIZE": 8,
    "L2CAP_TX_QUEUE_SIZE": 8,
    "L2CAP_RX_PACKET_POOL_SIZE": 8,
    "L2CAP_TX_PACKET_POOL_SIZE": 8,
    "GATT_CLIENT_NOTIFICATION_MAX_SUBSCRIBERS": 1,
    "GATT_CLIENT_NOTIFICATION_QUEUE_SIZE": 1,
}

_FEATURE_PREFIX = "CARGO_FEATURE_"
_USIZE_MAX = 2**64 - 1
_USIZE_PATTERN = re.compile(r"\+?[0-9]+")


class ConfigError(ValueError):
    """A configuration variable is unknown, malformed or set twice."""


@dataclass
class _ConfigState:
    value: int
    seen_feature: bool = False
    seen_env: bool = False


def _parse_usize(text: str) -> int | None:
    if not _USIZE_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _USIZE_MAX else None


def resolve_config(crate_name: str, environ: Mapping[str, str] | None = None) -> dict[str, int]:
    """Resolve every configuration value; environment variables beat features."""
    if environ is None:
        environ = os.environ
    prefix = crate_name.upper().replace("-", "_") + "_"
    states = {name: _ConfigState(default) for name, default in CONFIG_DEFAULTS.items()}

    for var, raw in environ.items():
        if var.startswith(prefix):
            name = var[len(prefix):]
            state = states.get(name)
            if state is None:
                raise ConfigError(f"Unknown env var {name}")
            value = _parse_usize(raw)
            if value is None:
                raise ConfigError(f"Invalid value for env var {name}: {raw}")
            state.value = value
            state.seen_env = True

        if var.startswith(_FEATURE_PREFIX):
            feature = var[len(_FEATURE_PREFIX):]
            name, sep, text = feature.rpartition("_")
            if not sep:
                continue
            state = states.get(name)
            if state is None:
                continue
            value = _parse_usize(text)
            if value is None:
                raise ConfigError(f"Invalid value for feature {name}: {text}")
            if state.seen_env:
                continue
            if state.seen_feature:
                raise ConfigError(
                    f"multiple values set for feature {name}: {state.value} and {value}"
                )
            state.value = value
            state.seen_feature = True

    return {name: state.value for name, state in states.items()}


def render_config(values: Mapping[str, int]) -> str:
    """Render resolved values as Python constant definitions, one per line."""
    return "".join(f"{name} = {value}\n" for name, value in values.items())