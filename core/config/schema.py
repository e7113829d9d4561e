"""Typed config schema blocks shared by loader/validator/runtime."""

from dataclasses import dataclass, field
from typing import List, Optional


class ConfigError(Exception):
    pass


@dataclass
class RuntimeConfig:
    log_level: str = "info"
    # 0 means requests waits indefinitely.
    upload_timeout_s: float = 0.0


@dataclass
class CameraConfigBlock:
    name: str = ""
    device: str = ""
    token: str = ""
    fingerprint: str = ""
    resolutionx: int = 0
    resolutiony: int = 0
    type: str = "v4l2"


@dataclass
class EndpointConfigBlock:
    name: str = ""
    interval: int = 0
    snapshot_url: str = ""
    info_url: Optional[str] = None


@dataclass
class LoadedConfig:
    cameras: List[CameraConfigBlock]
    endpoints: List[EndpointConfigBlock]
    gpio_switch: Optional[int] = None
    gpio_led: Optional[int] = None
    gpio_active_low: bool = True
    gpio_required: bool = False
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    path: str = ""

    @property
    def gpio_configured(self) -> bool:
        return self.gpio_switch is not None and self.gpio_led is not None


__all__ = [
    "ConfigError",
    "RuntimeConfig",
    "CameraConfigBlock",
    "EndpointConfigBlock",
    "LoadedConfig",
]
