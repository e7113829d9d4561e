"""Config package facade."""

from .loader import DEFAULT_CONFIG_PATH, load_config
from .schema import (
    CameraConfigBlock,
    ConfigError,
    EndpointConfigBlock,
    LoadedConfig,
    RuntimeConfig,
)
from .validate import validate_config

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CameraConfigBlock",
    "ConfigError",
    "EndpointConfigBlock",
    "LoadedConfig",
    "RuntimeConfig",
    "load_config",
    "validate_config",
]
