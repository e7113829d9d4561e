"""Runtime assembly helpers: cameras, gate, endpoints, uploader, and wiring."""

from __future__ import annotations

import logging

from camera import CameraSource, build_camera_config, create_camera
from gate.base import Gate
from output.endpoints import build_endpoint_table_from_loaded_config
from output.uploader import Uploader

from .config import LoadedConfig
from .dispatch import DispatchLoop

L = logging.getLogger("snapshot_relay.runtime")


def build_camera_sources(cfg: LoadedConfig) -> list[CameraSource]:
    sources = []
    for block in cfg.cameras:
        cam_cfg = build_camera_config(block)
        sources.append(CameraSource(create_camera(cam_cfg)))
    return sources


def _build_gate(cfg: LoadedConfig, pin_factory=None) -> Gate:
    if cfg.gpio_switch is None and cfg.gpio_led is None:
        from gate.base import OpenGate

        return OpenGate()
    # gpiozero is only imported when a pin is actually configured.
    from gate.gpio import build_gate_from_loaded_config

    return build_gate_from_loaded_config(cfg, pin_factory=pin_factory)


def build_dispatch_loop(
    cfg: LoadedConfig,
    *,
    gate: Gate | None = None,
    uploader: Uploader | None = None,
    pin_factory=None,
    **loop_kwargs,
) -> DispatchLoop:
    sources = build_camera_sources(cfg)
    endpoints = build_endpoint_table_from_loaded_config(cfg)
    if uploader is None:
        uploader = Uploader(timeout_s=float(cfg.runtime.upload_timeout_s or 0.0))
    if gate is None:
        gate = _build_gate(cfg, pin_factory=pin_factory)
    if not sources:
        L.warning("No cameras configured; the loop will only poll the gate")
    loop = DispatchLoop(gate, sources, endpoints, uploader, **loop_kwargs)
    L.info(
        "Assembled: cameras=%s endpoints=%s min_interval=%ss gate=%s",
        ", ".join(s.config.name for s in sources) or "none",
        ", ".join(ep.name for ep in endpoints),
        loop.min_interval,
        "gpio" if getattr(gate, "enabled", False) else "off",
    )
    return loop


__all__ = ["build_camera_sources", "build_dispatch_loop"]
