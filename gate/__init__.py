from .base import (
    Gate,
    GateController,
    GpioInitError,
    IndicatorOutput,
    OpenGate,
    SwitchInput,
)
from .toggle import TOGGLE_SIGNAL, SwitchSignal, install_toggle_handler

__all__ = [
    "Gate",
    "GpioInitError",
    "GateController",
    "IndicatorOutput",
    "OpenGate",
    "SwitchInput",
    "SwitchSignal",
    "TOGGLE_SIGNAL",
    "install_toggle_handler",
]
