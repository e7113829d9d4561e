# -- coding: utf-8 --

import logging
import os
import re

from camera.base import (
    BaseCamera,
    CameraConfig,
    DeviceError,
    EmptyFrameError,
    register_camera,
)

L = logging.getLogger("snapshot_relay.camera.mock")

_SUPPORTED_EXTS = {".jpg", ".jpeg", ".png", ".bmp"}


def _natural_key(name: str):
    parts = re.split(r"(\d+)", name)
    return [int(part) if part.isdigit() else part.lower() for part in parts]


def _list_images(root_dir: str) -> list[str]:
    files = []
    for name in os.listdir(root_dir):
        full = os.path.join(root_dir, name)
        if not os.path.isfile(full):
            continue
        if os.path.splitext(name)[1].lower() in _SUPPORTED_EXTS:
            files.append(full)
    return sorted(files, key=lambda p: _natural_key(os.path.basename(p)))


@register_camera("mock")
class MockCamera(BaseCamera):
    """Replays image files from the directory given as `device`, looping at the end."""

    def __init__(self, cfg: CameraConfig):
        super().__init__(cfg)
        self._pos = 0

    def capture_frame(self) -> bytes:
        root_dir = os.path.abspath(self.cfg.device)
        if not os.path.isdir(root_dir):
            raise DeviceError(f"mock image dir not found: {root_dir}")
        paths = _list_images(root_dir)
        if not paths:
            raise DeviceError(f"no images found in {root_dir}")
        path = paths[self._pos % len(paths)]
        self._pos += 1
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise DeviceError(f"read_failed: {e}") from e
        if not data:
            raise EmptyFrameError(f"empty image file {path}")
        L.debug("mock %s @ %s", self.cfg.name, os.path.basename(path))
        return data


__all__ = ["MockCamera"]
