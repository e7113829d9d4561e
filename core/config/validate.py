"""Relay config value validation."""

from __future__ import annotations

from typing import Any

from .schema import ConfigError, LoadedConfig

_LOG_LEVELS = {"debug", "info", "warning", "warn", "error", "critical"}


def validate_config(cfg: LoadedConfig) -> None:
    # cameras
    for i, cam in enumerate(cfg.cameras):
        prefix = f"cameras[{i}]"
        _require_str(f"{prefix}.name", cam.name)
        _require_str(f"{prefix}.device", cam.device)
        _require_str(f"{prefix}.token", cam.token, allow_empty=True)
        _require_str(f"{prefix}.fingerprint", cam.fingerprint, allow_empty=True)
        _require_str(f"{prefix}.type", cam.type)
        cam.resolutionx = _require_int(f"{prefix}.resolutionx", cam.resolutionx, min_v=1)
        cam.resolutiony = _require_int(f"{prefix}.resolutiony", cam.resolutiony, min_v=1)

    # endpoints
    if not cfg.endpoints:
        raise ConfigError("endpoints must contain at least one entry")
    for i, ep in enumerate(cfg.endpoints):
        prefix = f"endpoints[{i}]"
        _require_str(f"{prefix}.name", ep.name)
        ep.interval = _require_int(f"{prefix}.interval", ep.interval, min_v=1)
        _require_str(f"{prefix}.snapshot_url", ep.snapshot_url)
        if ep.info_url is not None:
            _require_str(f"{prefix}.info_url", ep.info_url)

    # gpio
    if cfg.gpio_switch is not None:
        cfg.gpio_switch = _require_int("gpio_switch", cfg.gpio_switch, min_v=0)
    if cfg.gpio_led is not None:
        cfg.gpio_led = _require_int("gpio_led", cfg.gpio_led, min_v=0)
    _require_bool("gpio_active_low", cfg.gpio_active_low)
    _require_bool("gpio_required", cfg.gpio_required)

    # runtime
    cfg.runtime.upload_timeout_s = _require_float(
        "runtime.upload_timeout_s", cfg.runtime.upload_timeout_s, min_v=0.0
    )
    level = str(cfg.runtime.log_level or "").strip().lower()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"runtime.log_level must be one of {', '.join(sorted(_LOG_LEVELS))}"
        )


def _require_int(
    name: str, value: Any, *, min_v: int | None = None, max_v: int | None = None
) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer")
    try:
        iv = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer") from e
    if min_v is not None and iv < min_v:
        op = ">=" if min_v != 1 else ">"
        threshold = min_v if min_v != 1 else 0
        raise ConfigError(f"{name} must be {op} {threshold}")
    if max_v is not None and iv > max_v:
        raise ConfigError(f"{name} must be <= {max_v}")
    return iv


def _require_float(
    name: str, value: Any, *, min_v: float | None = None, max_v: float | None = None
) -> float:
    try:
        fv = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number") from e
    if min_v is not None and fv < min_v:
        raise ConfigError(f"{name} must be >= {min_v:g}")
    if max_v is not None and fv > max_v:
        raise ConfigError(f"{name} must be <= {max_v:g}")
    return fv


def _require_str(name: str, value: Any, *, allow_empty: bool = False) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string")
    if not allow_empty and not value.strip():
        raise ConfigError(f"{name} must not be empty")
    return value


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false")
    return value


__all__ = ["validate_config"]
