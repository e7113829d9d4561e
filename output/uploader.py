# -- coding: utf-8 --
"""Uploader: single-attempt HTTP PUT of snapshots and camera info."""

import logging
from typing import Any

import requests

from camera.base import CameraConfig

L = logging.getLogger("snapshot_relay.output.uploader")

DRIVER_LABEL = "V4L2"
TRIGGER_SCHEME_LABEL = "THIRTY_SEC"
IMAGE_CONTENT_TYPE = "image/jpg"


class UploadError(Exception):
    pass


def build_info_payload(camera: CameraConfig) -> dict[str, Any]:
    return {
        "config": {
            "path": camera.device,
            "name": camera.name,
            "driver": DRIVER_LABEL,
            "trigger_scheme": TRIGGER_SCHEME_LABEL,
            "resolution": {
                "width": camera.width,
                "height": camera.height,
            },
        }
    }


class Uploader:
    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_s: float | None = None,
    ):
        self._session = session or requests.Session()
        # None/0 keeps requests' default of waiting indefinitely.
        self._timeout = timeout_s or None

    def put_image(self, url: str, image: bytes, token: str, fingerprint: str) -> None:
        headers = {
            "Content-Type": IMAGE_CONTENT_TYPE,
            "Accept": "*/*",
            "Content-Length": str(len(image)),
            "Token": token,
            "Fingerprint": fingerprint,
        }
        self._put(url, headers=headers, data=image)

    def put_info(
        self, url: str, camera: CameraConfig, token: str, fingerprint: str
    ) -> None:
        headers = {
            "Content-Type": "application/json",
            "Token": token,
            "Fingerprint": fingerprint,
        }
        self._put(url, headers=headers, json=build_info_payload(camera))

    def close(self) -> None:
        self._session.close()

    def _put(self, url: str, **kwargs) -> None:
        try:
            resp = self._session.put(url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise UploadError(f"PUT {url} failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            body = (resp.text or "")[:200]
            raise UploadError(f"PUT {url} returned HTTP {resp.status_code}: {body}")
        L.debug("PUT %s -> %s", url, resp.status_code)


__all__ = [
    "Uploader",
    "UploadError",
    "build_info_payload",
    "DRIVER_LABEL",
    "TRIGGER_SCHEME_LABEL",
]
