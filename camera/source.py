"""Per-camera capture bookkeeping for the dispatch loop."""

from __future__ import annotations

import logging

from camera.base import BaseCamera, CameraConfig, DeviceError, EmptyFrameError

L = logging.getLogger("snapshot_relay.camera.source")

EPOCH = 0.0


def elapsed_seconds(now: float, since: float) -> int:
    """Whole seconds between two timestamps, truncated; never negative."""
    return max(int(now - since), 0)


class CameraSource:
    def __init__(self, camera: BaseCamera):
        self.camera = camera
        self.last_run = EPOCH

    @property
    def config(self) -> CameraConfig:
        return self.camera.cfg

    def seconds_since_last_run(self, now: float) -> int:
        return elapsed_seconds(now, self.last_run)

    def is_due(self, now: float, min_interval: int) -> bool:
        return self.seconds_since_last_run(now) > min_interval

    def capture_if_due(self, now: float, min_interval: int) -> bytes | None:
        """Capture when more than `min_interval` seconds passed since the last run.

        A device that cannot be opened leaves `last_run` untouched so it is
        retried on the next tick. Any attempt that reached the device moves
        `last_run` to `now`, including one that produced an empty frame.
        """
        if not self.is_due(now, min_interval):
            return None
        try:
            data = self.camera.capture_frame()
        except DeviceError as e:
            L.error("Error grabbing image from camera %s: %s", self.config.device, e)
            return None
        except EmptyFrameError as e:
            self._mark_run(now)
            L.warning("Empty frame from camera %s: %s", self.config.device, e)
            return None
        self._mark_run(now)
        if not data:
            L.warning("Empty frame from camera %s", self.config.device)
            return None
        return data

    def _mark_run(self, now: float) -> None:
        if now > self.last_run:
            self.last_run = now


__all__ = ["CameraSource", "elapsed_seconds", "EPOCH"]
