"""YAML loader and section builders for relay configuration."""

from __future__ import annotations

import os
from typing import Any

import yaml

from .schema import (
    CameraConfigBlock,
    ConfigError,
    EndpointConfigBlock,
    LoadedConfig,
    RuntimeConfig,
)

DEFAULT_CONFIG_PATH = "config.yml"

_TOP_LEVEL_KEYS = {
    "cameras",
    "endpoints",
    "gpio_switch",
    "gpio_led",
    "gpio_active_low",
    "gpio_required",
    "runtime",
}
_CAMERA_REQUIRED = (
    "name",
    "device",
    "token",
    "fingerprint",
    "resolutionx",
    "resolutiony",
)
_ENDPOINT_REQUIRED = ("name", "interval", "snapshot_url")


def load_config(path: str = DEFAULT_CONFIG_PATH) -> LoadedConfig:
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    data = _read_yaml(path)
    _validate_allowed_keys(data, _TOP_LEVEL_KEYS, "", path)

    cameras = _build_list(
        data.get("cameras"),
        CameraConfigBlock,
        path,
        section="cameras",
        required=_CAMERA_REQUIRED,
    )
    endpoints = _build_list(
        data.get("endpoints"),
        EndpointConfigBlock,
        path,
        section="endpoints",
        required=_ENDPOINT_REQUIRED,
    )
    runtime_data = data.get("runtime")
    if runtime_data is not None and not isinstance(runtime_data, dict):
        raise ConfigError(f"'runtime' must be a mapping in {path}")
    runtime = _build_dataclass(RuntimeConfig, runtime_data or {}, path, section="runtime")

    cfg = LoadedConfig(cameras=cameras, endpoints=endpoints, runtime=runtime, path=path)
    for key in ("gpio_switch", "gpio_led", "gpio_active_low", "gpio_required"):
        if data.get(key) is not None:
            setattr(cfg, key, data[key])
    return cfg


def _read_yaml(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"YAML root must be a mapping: {path}")
    return data


def _build_dataclass(cls, data: dict[str, Any], path: str, section: str):
    obj = cls()
    fields = cls.__dataclass_fields__
    for k, v in (data or {}).items():
        if k in fields:
            setattr(obj, k, v)
        else:
            raise ConfigError(f"Unknown field {section}.{k} in {path}")
    return obj


def _build_list(
    data: Any,
    cls,
    path: str,
    *,
    section: str,
    required: tuple[str, ...],
) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"'{section}' must be a list in {path}")
    items = []
    for i, entry in enumerate(data):
        item_section = f"{section}[{i}]"
        if not isinstance(entry, dict):
            raise ConfigError(f"'{item_section}' must be a mapping in {path}")
        missing = [key for key in required if entry.get(key) is None]
        if missing:
            raise ConfigError(
                f"Missing field(s) {', '.join(missing)} in {item_section} of {path}"
            )
        items.append(_build_dataclass(cls, entry, path, section=item_section))
    return items


def _validate_allowed_keys(
    data: dict[str, Any], allowed_keys: set[str], section: str, path: str
) -> None:
    for key in data.keys():
        if key not in allowed_keys:
            name = f"{section}.{key}" if section else key
            raise ConfigError(f"Unknown field {name} in {path}")


__all__ = ["DEFAULT_CONFIG_PATH", "load_config"]
