from .base import (
    CaptureError,
    DeviceError,
    EmptyFrameError,
    CameraConfig,
    build_camera_config,
    BaseCamera,
    register_camera,
    create_camera,
)
from .source import CameraSource

__all__ = [
    "CaptureError",
    "DeviceError",
    "EmptyFrameError",
    "CameraConfig",
    "build_camera_config",
    "BaseCamera",
    "register_camera",
    "create_camera",
    "CameraSource",
]
