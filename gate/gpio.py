# -- coding: utf-8 --

import logging

from gpiozero import DigitalInputDevice, DigitalOutputDevice

from gate.base import Gate, GateController, GpioInitError, OpenGate
from gate.toggle import TOGGLE_SIGNAL, SwitchSignal

L = logging.getLogger("snapshot_relay.gate.gpio")


class GpioSwitch:
    def __init__(self, pin: int, *, pin_factory=None):
        self.pin = pin
        self._dev = DigitalInputDevice(pin, pull_up=True, pin_factory=pin_factory)

    def is_high(self) -> bool:
        # With the pull-up the device reports active while the pin is pulled low.
        return not self._dev.is_active

    def close(self) -> None:
        self._dev.close()


class GpioLed:
    def __init__(self, pin: int, *, pin_factory=None):
        self.pin = pin
        self._dev = DigitalOutputDevice(
            pin, initial_value=False, pin_factory=pin_factory
        )

    def set(self, on: bool) -> None:
        if on:
            self._dev.on()
        else:
            self._dev.off()

    def close(self) -> None:
        self._dev.close()


def acquire_pins(
    switch_pin: int, led_pin: int, *, pin_factory=None
) -> tuple[GpioSwitch, GpioLed]:
    """Acquire both pins or neither."""
    switch = None
    try:
        switch = GpioSwitch(switch_pin, pin_factory=pin_factory)
        led = GpioLed(led_pin, pin_factory=pin_factory)
    except Exception as e:
        # Pin backends raise their own error types (lgpio.error, OSError, ...).
        if switch is not None:
            switch.close()
        raise GpioInitError(
            f"cannot acquire switch={switch_pin} led={led_pin}: {e}"
        ) from e
    return switch, led


def build_gate(
    switch_pin: int | None,
    led_pin: int | None,
    *,
    active_low: bool = True,
    required: bool = False,
    toggle: SwitchSignal = TOGGLE_SIGNAL,
    pin_factory=None,
) -> Gate:
    if switch_pin is None and led_pin is None:
        L.info("No GPIO switch configured; capture always permitted")
        return OpenGate()
    if switch_pin is None or led_pin is None:
        msg = (
            f"gpio_switch and gpio_led must be set together "
            f"(switch={switch_pin} led={led_pin})"
        )
        if required:
            raise GpioInitError(msg)
        L.warning("%s; gate disabled", msg)
        return OpenGate()
    try:
        switch, led = acquire_pins(switch_pin, led_pin, pin_factory=pin_factory)
    except GpioInitError as e:
        if required:
            raise
        L.error("GPIO init failed, gate disabled: %s", e)
        return OpenGate()
    L.info(
        "GPIO gate enabled: switch=%s led=%s polarity=active-%s",
        switch_pin,
        led_pin,
        "low" if active_low else "high",
    )
    return GateController(switch, led, active_low=active_low, toggle=toggle)


def build_gate_from_loaded_config(cfg, *, pin_factory=None) -> Gate:
    return build_gate(
        cfg.gpio_switch,
        cfg.gpio_led,
        active_low=bool(cfg.gpio_active_low),
        required=bool(cfg.gpio_required),
        pin_factory=pin_factory,
    )


__all__ = [
    "GpioInitError",
    "GpioSwitch",
    "GpioLed",
    "acquire_pins",
    "build_gate",
    "build_gate_from_loaded_config",
]
