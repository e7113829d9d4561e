import os
import signal
import tempfile
import unittest
from unittest import mock

import main as entrypoint
from core.config import load_config, validate_config
from core.runtime_assembly import build_dispatch_loop
from gate import OpenGate

T0 = 1_700_000_000.0


class RecordingUploader:
    def __init__(self):
        self.calls = []

    def put_image(self, url, image, token, fingerprint):
        self.calls.append(("image", url, image))

    def put_info(self, url, camera, token, fingerprint):
        self.calls.append(("info", url, camera.name))

    def close(self):
        pass


class _ConfigDirMixin:
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.image_dir = os.path.join(self._tmp.name, "frames")
        os.makedirs(self.image_dir)
        with open(os.path.join(self.image_dir, "0001.jpg"), "wb") as f:
            f.write(b"\xff\xd8frame\xff\xd9")

    def write_config(self, extra: str = "") -> str:
        path = os.path.join(self._tmp.name, "config.yml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(
                "cameras:\n"
                "  - name: bench\n"
                f"    device: {self.image_dir}\n"
                "    type: mock\n"
                "    token: tok\n"
                "    fingerprint: fp\n"
                "    resolutionx: 640\n"
                "    resolutiony: 480\n"
                "endpoints:\n"
                "  - name: local\n"
                "    interval: 5\n"
                "    snapshot_url: http://127.0.0.1:9/snapshot\n"
                "    info_url: http://127.0.0.1:9/info\n"
                + extra
            )
        return path


class TestBuildDispatchLoop(_ConfigDirMixin, unittest.TestCase):
    def test_mock_camera_end_to_end(self):
        cfg = load_config(self.write_config())
        validate_config(cfg)
        uploader = RecordingUploader()

        loop = build_dispatch_loop(cfg, uploader=uploader)

        self.assertIsInstance(loop.gate, OpenGate)
        self.assertEqual(loop.min_interval, 5)
        report = loop.tick(T0)
        self.assertEqual(report.captured, ["bench"])
        self.assertEqual(
            uploader.calls,
            [
                ("info", "http://127.0.0.1:9/info", "bench"),
                ("image", "http://127.0.0.1:9/snapshot", b"\xff\xd8frame\xff\xd9"),
            ],
        )


class TestMain(_ConfigDirMixin, unittest.TestCase):
    def setUp(self):
        super().setUp()
        previous = signal.getsignal(signal.SIGUSR1)
        self.addCleanup(signal.signal, signal.SIGUSR1, previous)

    def test_missing_config_exits_1(self):
        with self.assertRaises(SystemExit) as cm:
            entrypoint.main(["--config", os.path.join(self._tmp.name, "absent.yml")])
        self.assertEqual(cm.exception.code, 1)

    def test_required_gpio_with_single_pin_exits_1(self):
        path = self.write_config("gpio_switch: 17\ngpio_required: true\n")
        with self.assertRaises(SystemExit) as cm:
            entrypoint.main(["--config", path])
        self.assertEqual(cm.exception.code, 1)

    def test_ctrl_c_stops_and_releases_resources(self):
        path = self.write_config()
        loop = mock.MagicMock()
        loop.run.side_effect = KeyboardInterrupt
        with mock.patch.object(entrypoint, "build_dispatch_loop", return_value=loop):
            entrypoint.main(["--config", path])
        loop.run.assert_called_once_with()
        loop.gate.close.assert_called_once()
        loop.uploader.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
