import unittest

from camera import BaseCamera, CameraConfig, CameraSource, DeviceError, EmptyFrameError


class ScriptedCamera(BaseCamera):
    """Returns (or raises) the scripted outcomes in order."""

    def __init__(self, *outcomes, name="cam"):
        super().__init__(CameraConfig(name=name, device=f"/dev/{name}", width=640, height=480))
        self.outcomes = list(outcomes)
        self.calls = 0

    def capture_frame(self) -> bytes:
        self.calls += 1
        outcome = self.outcomes.pop(0) if self.outcomes else b"jpeg"
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


T0 = 1_700_000_000.0


class TestCameraSource(unittest.TestCase):
    def test_first_capture_is_immediate(self):
        source = CameraSource(ScriptedCamera(b"frame"))
        self.assertEqual(source.last_run, 0.0)
        self.assertEqual(source.capture_if_due(T0, 10), b"frame")
        self.assertEqual(source.last_run, T0)

    def test_due_uses_strict_inequality_on_whole_seconds(self):
        cam = ScriptedCamera()
        source = CameraSource(cam)
        source.capture_if_due(T0, 10)
        self.assertIsNone(source.capture_if_due(T0 + 5, 10))
        self.assertIsNone(source.capture_if_due(T0 + 10, 10))
        self.assertIsNone(source.capture_if_due(T0 + 10.9, 10))
        self.assertEqual(cam.calls, 1)
        self.assertEqual(source.capture_if_due(T0 + 11, 10), b"jpeg")
        self.assertEqual(cam.calls, 2)
        self.assertEqual(source.last_run, T0 + 11)

    def test_device_error_keeps_timestamp_and_retries_next_tick(self):
        cam = ScriptedCamera(DeviceError("cannot open"), DeviceError("cannot open"), b"ok")
        source = CameraSource(cam)
        with self.assertLogs("snapshot_relay.camera.source", level="ERROR") as logs:
            self.assertIsNone(source.capture_if_due(T0, 10))
        self.assertIn("/dev/cam", logs.output[0])
        self.assertEqual(source.last_run, 0.0)
        self.assertIsNone(source.capture_if_due(T0 + 1, 10))
        self.assertEqual(source.last_run, 0.0)
        self.assertEqual(source.capture_if_due(T0 + 2, 10), b"ok")
        self.assertEqual(cam.calls, 3)
        self.assertEqual(source.last_run, T0 + 2)

    def test_empty_frame_advances_timestamp(self):
        for outcome in (EmptyFrameError("empty"), b""):
            with self.subTest(outcome=outcome):
                source = CameraSource(ScriptedCamera(outcome))
                with self.assertLogs("snapshot_relay.camera.source", level="WARNING"):
                    self.assertIsNone(source.capture_if_due(T0, 10))
                self.assertEqual(source.last_run, T0)
                # Not retried until the interval elapses again.
                self.assertIsNone(source.capture_if_due(T0 + 1, 10))
                self.assertEqual(source.camera.calls, 1)

    def test_last_run_never_moves_backward(self):
        source = CameraSource(ScriptedCamera())
        source.capture_if_due(T0, 0)
        source.last_run = T0 + 100
        # Clock stepped back far enough to look due again.
        source._mark_run(T0 + 50)
        self.assertEqual(source.last_run, T0 + 100)
        history = []
        for now in (T0 + 200, T0 + 150, T0 + 300):
            source.capture_if_due(now, 0)
            history.append(source.last_run)
        self.assertEqual(history, sorted(history))

    def test_seconds_since_last_run(self):
        source = CameraSource(ScriptedCamera())
        source.capture_if_due(T0, 10)
        self.assertEqual(source.seconds_since_last_run(T0 + 11.7), 11)
        self.assertEqual(source.seconds_since_last_run(T0 - 5), 0)


if __name__ == "__main__":
    unittest.main()
