import os
import tempfile
import unittest
from unittest import mock

import cv2
import numpy as np

from camera import CameraConfig, DeviceError, EmptyFrameError, create_camera
from camera.mock import MockCamera
from camera.v4l2 import V4l2Camera

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-payload\xff\xd9"


def _v4l2_camera(**overrides):
    fields = dict(name="front", device="/dev/video0", width=1280, height=720)
    fields.update(overrides)
    return V4l2Camera(CameraConfig(**fields))


class TestV4l2Camera(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("camera.v4l2.cv2.VideoCapture")
        self.video_capture = patcher.start()
        self.addCleanup(patcher.stop)
        self.cap = self.video_capture.return_value
        self.cap.isOpened.return_value = True

    def test_returns_raw_mjpg_buffer(self):
        raw = np.frombuffer(JPEG_BYTES, dtype=np.uint8).reshape(1, -1)
        self.cap.read.return_value = (True, raw)

        data = _v4l2_camera().capture_frame()

        self.assertEqual(data, JPEG_BYTES)
        self.video_capture.assert_called_once_with("/dev/video0", cv2.CAP_V4L2)
        self.cap.set.assert_any_call(cv2.CAP_PROP_FRAME_WIDTH, 1280)
        self.cap.set.assert_any_call(cv2.CAP_PROP_FRAME_HEIGHT, 720)
        self.cap.set.assert_any_call(cv2.CAP_PROP_FPS, 30)
        self.cap.set.assert_any_call(
            cv2.CAP_PROP_FOURCC, cv2.VideoWriter_fourcc(*"MJPG")
        )
        self.cap.release.assert_called_once()

    def test_decoded_frame_is_encoded_to_jpeg(self):
        self.cap.read.return_value = (True, np.zeros((8, 8, 3), dtype=np.uint8))
        data = _v4l2_camera().capture_frame()
        self.assertTrue(data.startswith(b"\xff\xd8"))

    def test_open_failure_is_device_error(self):
        self.cap.isOpened.return_value = False
        with self.assertRaises(DeviceError):
            _v4l2_camera().capture_frame()
        self.cap.read.assert_not_called()
        self.cap.release.assert_called_once()

    def test_read_failure_is_device_error(self):
        self.cap.read.return_value = (False, None)
        with self.assertRaises(DeviceError):
            _v4l2_camera().capture_frame()
        self.cap.release.assert_called_once()

    def test_empty_frame(self):
        self.cap.read.return_value = (True, np.empty((0,), dtype=np.uint8))
        with self.assertRaises(EmptyFrameError):
            _v4l2_camera().capture_frame()


class TestMockCamera(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = self._tmp.name

    def _write(self, name: str, data: bytes):
        with open(os.path.join(self.root, name), "wb") as f:
            f.write(data)

    def _camera(self, device=None):
        return MockCamera(
            CameraConfig(name="mock", device=device or self.root, width=1, height=1, type="mock")
        )

    def test_replays_files_in_natural_order_and_loops(self):
        self._write("frame10.jpg", b"ten")
        self._write("frame2.jpg", b"two")
        self._write("notes.txt", b"skip me")
        cam = self._camera()
        self.assertEqual(
            [cam.capture_frame() for _ in range(3)], [b"two", b"ten", b"two"]
        )

    def test_missing_dir_is_device_error(self):
        with self.assertRaises(DeviceError):
            self._camera(os.path.join(self.root, "absent")).capture_frame()

    def test_dir_without_images_is_device_error(self):
        with self.assertRaises(DeviceError):
            self._camera().capture_frame()

    def test_empty_file_is_empty_frame(self):
        self._write("blank.jpg", b"")
        with self.assertRaises(EmptyFrameError):
            self._camera().capture_frame()


class TestCreateCamera(unittest.TestCase):
    def test_resolves_registered_backends(self):
        self.assertIsInstance(
            create_camera(CameraConfig(name="a", device="/dev/video0")), V4l2Camera
        )
        self.assertIsInstance(
            create_camera(CameraConfig(name="b", device=".", type="mock")), MockCamera
        )

    def test_unknown_type(self):
        with self.assertRaises(ValueError) as cm:
            create_camera(CameraConfig(name="c", device="x", type="nope"))
        self.assertIn("nope", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
