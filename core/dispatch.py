"""DispatchLoop: gate check, camera due checks, capture, and endpoint fan-out."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Callable

from camera.source import CameraSource
from core.contracts import TickReport, UploadAttempt
from gate.base import Gate
from output.endpoints import EndpointConfig, EndpointTable
from output.uploader import Uploader, UploadError

L = logging.getLogger("snapshot_relay.dispatch")

TICK_INTERVAL_S = 1.0


class DispatchLoop:
    def __init__(
        self,
        gate: Gate,
        sources: Iterable[CameraSource],
        endpoints: EndpointTable,
        uploader: Uploader,
        *,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.gate = gate
        self.sources = tuple(sources)
        self.endpoints = endpoints
        self.uploader = uploader
        # Computed once; config is never reloaded.
        self.min_interval = endpoints.min_cadence()
        self._clock = clock
        self._sleep = sleep

    def run(self, max_ticks: int | None = None) -> None:
        """Tick forever (or `max_ticks` times), sleeping one second after each tick."""
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self.tick()
            ticks += 1
            self._sleep(TICK_INTERVAL_S)

    def tick(self, now: float | None = None) -> TickReport:
        now = self._clock() if now is None else now
        report = TickReport(started_at=now)
        if not self._gate_open():
            return report
        report.gate_open = True
        for source in self.sources:
            try:
                self._camera_pass(source, now, report)
            except Exception:
                L.exception("Camera pass failed for %s", source.config.name)
        return report

    def _gate_open(self) -> bool:
        try:
            permitted = self.gate.can_capture()
        except Exception:
            L.exception("Gate check failed; skipping tick")
            return False
        if not permitted:
            L.debug("Capture blocked by switch")
        return permitted

    def _camera_pass(self, source: CameraSource, now: float, report: TickReport):
        # Fan-out measures against the run before this capture.
        since = source.seconds_since_last_run(now)
        image = source.capture_if_due(now, self.min_interval)
        if image is None:
            return
        cam = source.config
        report.captured.append(cam.name)
        L.info("Captured %s bytes from %s (%s)", len(image), cam.name, cam.device)
        for ep in self.endpoints.due(since):
            if ep.info_url:
                report.uploads.append(
                    self._send(
                        cam.name,
                        ep,
                        "info",
                        lambda: self.uploader.put_info(
                            ep.info_url, cam, cam.token, cam.fingerprint
                        ),
                    )
                )
            report.uploads.append(
                self._send(
                    cam.name,
                    ep,
                    "image",
                    lambda: self.uploader.put_image(
                        ep.snapshot_url, image, cam.token, cam.fingerprint
                    ),
                )
            )

    def _send(
        self,
        camera_name: str,
        ep: EndpointConfig,
        kind: str,
        call: Callable[[], None],
    ) -> UploadAttempt:
        attempt = UploadAttempt(camera=camera_name, endpoint=ep.name, kind=kind)
        try:
            call()
        except UploadError as e:
            attempt.error = str(e)
            L.error("Error sending %s to %s for %s: %s", kind, ep.name, camera_name, e)
            return attempt
        except Exception as e:
            attempt.error = f"{type(e).__name__}: {e}"
            L.exception("Unexpected error sending %s to %s", kind, ep.name)
            return attempt
        attempt.ok = True
        L.info("Sent %s to %s for %s", kind, ep.name, camera_name)
        return attempt


__all__ = ["DispatchLoop", "TICK_INTERVAL_S"]
