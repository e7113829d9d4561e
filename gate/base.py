# -- coding: utf-8 --

import logging
from typing import Protocol

from gate.toggle import TOGGLE_SIGNAL, SwitchSignal

L = logging.getLogger("snapshot_relay.gate")


class Gate(Protocol):
    def can_capture(self) -> bool: ...
    def close(self) -> None: ...


class SwitchInput(Protocol):
    def is_high(self) -> bool: ...
    def close(self) -> None: ...


class IndicatorOutput(Protocol):
    def set(self, on: bool) -> None: ...
    def close(self) -> None: ...


class GpioInitError(Exception):
    """Switch or LED pin could not be acquired."""


class OpenGate:
    """No switch configured: capture is always permitted, nothing is driven."""

    enabled = False

    def can_capture(self) -> bool:
        return True

    def close(self) -> None:
        return None


class GateController:
    enabled = True

    def __init__(
        self,
        switch: SwitchInput,
        led: IndicatorOutput,
        *,
        active_low: bool = True,
        toggle: SwitchSignal = TOGGLE_SIGNAL,
    ):
        self.switch = switch
        self.led = led
        self.active_low = active_low
        self.toggle = toggle

    def can_capture(self) -> bool:
        if self.toggle.consume():
            self.active_low = not self.active_low
            L.info(
                "Gate polarity switched to active-%s",
                "low" if self.active_low else "high",
            )
        level_high = self.switch.is_high()
        permitted = (not level_high) if self.active_low else level_high
        self.led.set(permitted)
        return permitted

    def close(self) -> None:
        try:
            self.led.set(False)
        finally:
            self.led.close()
            self.switch.close()


__all__ = [
    "GpioInitError",
    "Gate",
    "SwitchInput",
    "IndicatorOutput",
    "OpenGate",
    "GateController",
]
