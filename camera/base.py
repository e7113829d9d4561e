# -- coding: utf-8 --

import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Type

CameraFactory = Dict[str, Type["BaseCamera"]]
_registry: CameraFactory = {}

DEFAULT_CAMERA_TYPE = "v4l2"


class CaptureError(Exception):
    pass


class DeviceError(CaptureError):
    """Device could not be opened, started, or read."""


class EmptyFrameError(CaptureError):
    """Device delivered a frame without any image data."""


@dataclass(frozen=True)
class CameraConfig:
    name: str
    device: str
    token: str = ""
    fingerprint: str = ""
    width: int = 0
    height: int = 0
    type: str = DEFAULT_CAMERA_TYPE


def build_camera_config(cfg_block) -> CameraConfig:
    return CameraConfig(
        name=str(cfg_block.name),
        device=str(cfg_block.device),
        token=str(cfg_block.token or ""),
        fingerprint=str(cfg_block.fingerprint or ""),
        width=int(cfg_block.resolutionx),
        height=int(cfg_block.resolutiony),
        type=str(cfg_block.type or DEFAULT_CAMERA_TYPE).strip().lower(),
    )


class BaseCamera(ABC):
    def __init__(self, cfg: CameraConfig):
        self.cfg = cfg

    @abstractmethod
    def capture_frame(self) -> bytes:
        """Grab one encoded frame.

        Raises DeviceError when the device cannot be opened or read and
        EmptyFrameError when it answered with an empty frame.
        """


def register_camera(name: str):
    def decorator(cls):
        _registry[name] = cls
        return cls

    return decorator


def create_camera(cfg: CameraConfig) -> BaseCamera:
    name = cfg.type
    import_err: Exception | None = None
    if name not in _registry:
        # Backends register themselves on import (camera/<type>.py).
        try:
            importlib.import_module(f"{__package__ or 'camera'}.{name}")
        except ImportError as e:
            import_err = e
    if name not in _registry:
        hint = f" (import failed: {import_err})" if import_err else ""
        raise ValueError(
            f"Unknown camera type '{name}'. "
            f"Available: {', '.join(_registry.keys()) or 'none'}{hint}"
        )
    return _registry[name](cfg)


__all__ = [
    "CaptureError",
    "DeviceError",
    "EmptyFrameError",
    "CameraConfig",
    "build_camera_config",
    "BaseCamera",
    "register_camera",
    "create_camera",
    "DEFAULT_CAMERA_TYPE",
]
