# -- coding: utf-8 --

import logging
import time

import cv2
import numpy as np

from camera.base import (
    BaseCamera,
    DeviceError,
    EmptyFrameError,
    register_camera,
)

L = logging.getLogger("snapshot_relay.camera.v4l2")

CAPTURE_FPS = 30
CAPTURE_FOURCC = "MJPG"
JPEG_QUALITY = 90


def _is_raw_buffer(frame: np.ndarray) -> bool:
    # With RGB conversion off, MJPG frames arrive as one row of encoded bytes.
    return frame.ndim == 1 or (frame.ndim == 2 and frame.shape[0] == 1)


def encode_frame_jpeg(frame: np.ndarray, quality: int = JPEG_QUALITY) -> bytes:
    if _is_raw_buffer(frame):
        return frame.astype(np.uint8, copy=False).tobytes()
    params = [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)]
    ok, buf = cv2.imencode(".jpg", frame.astype(np.uint8, copy=False), params)
    if not ok:
        raise DeviceError("opencv_imencode_failed")
    return buf.tobytes()


@register_camera("v4l2")
class V4l2Camera(BaseCamera):
    """Opens the device for every capture and releases it right after."""

    def _start(self, cap) -> None:
        cap.set(cv2.CAP_PROP_FOURCC, cv2.VideoWriter_fourcc(*CAPTURE_FOURCC))
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, int(self.cfg.width))
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, int(self.cfg.height))
        cap.set(cv2.CAP_PROP_FPS, CAPTURE_FPS)
        cap.set(cv2.CAP_PROP_CONVERT_RGB, 0)

    def capture_frame(self) -> bytes:
        device = self.cfg.device
        L.debug("Grabbing image from camera %s", device)
        cap = cv2.VideoCapture(device, cv2.CAP_V4L2)
        try:
            if not cap.isOpened():
                raise DeviceError(f"cannot open {device}")
            try:
                self._start(cap)
            except cv2.error as e:
                raise DeviceError(f"cannot start {device}: {e}") from e
            start = time.perf_counter()
            ok, frame = cap.read()
            grab_ms = (time.perf_counter() - start) * 1000
            if not ok:
                raise DeviceError(f"capture failed on {device}")
            if frame is None or frame.size == 0:
                raise EmptyFrameError(f"empty frame from {device}")
            data = encode_frame_jpeg(frame)
            L.debug("Captured %s bytes from %s in %.1fms", len(data), device, grab_ms)
            return data
        finally:
            cap.release()


__all__ = ["V4l2Camera", "encode_frame_jpeg"]
