import unittest

import numpy as np

from detect_kit.postprocess import CURRENCY_PRESET, DetectionPostprocessor
from Retina_Assist.frame import FrameStatus, analyze_depth_frame, process_detection_frame
from Retina_Assist.navigation import NavigationDirective


class TestAnalyzeDepthFrame(unittest.TestCase):
    def test_ok_frame_carries_reading_and_directive(self) -> None:
        img = np.full((40, 60), 3000, dtype=np.uint16)
        img[:, 20:40] = 500
        res = analyze_depth_frame(img.ravel(), 60, 40, generation=7)

        self.assertTrue(res.ok)
        self.assertEqual(res.generation, 7)
        self.assertIsNone(res.error)
        self.assertEqual(res.value.reading.averages, (3000, 500, 3000))
        self.assertEqual(res.value.directive, NavigationDirective.STOP)

    def test_unreadable_buffer_is_skipped(self) -> None:
        res = analyze_depth_frame(b"\x01" * 7, 2, 2, generation=3)
        self.assertEqual(res.status, FrameStatus.SKIPPED)
        self.assertEqual(res.generation, 3)
        self.assertIsNone(res.value)
        self.assertIn("depth buffer", res.error)

    def test_invalid_dimensions_fail_without_raising(self) -> None:
        with self.assertLogs("Retina_Assist.frame", level="WARNING"):
            res = analyze_depth_frame(np.zeros(4, dtype=np.uint16), -1, 2)
        self.assertEqual(res.status, FrameStatus.FAILED)
        self.assertFalse(res.ok)


class TestProcessDetectionFrame(unittest.TestCase):
    def test_ok_frame(self) -> None:
        grid = np.zeros((1, 10, 32), dtype=np.float32)
        grid[0, 0:4, 0] = [100, 100, 40, 40]
        grid[0, 4 + 2, 0] = 0.8
        res = process_detection_frame(grid.ravel(), grid.shape, DetectionPostprocessor(CURRENCY_PRESET), generation=2)

        self.assertTrue(res.ok)
        self.assertEqual(res.generation, 2)
        self.assertEqual([d.class_id for d in res.value], [2])

    def test_unsupported_shape_fails(self) -> None:
        with self.assertLogs("Retina_Assist.frame", level="WARNING") as logs:
            res = process_detection_frame(
                np.zeros(400, dtype=np.float32), [1, 4, 100], DetectionPostprocessor(), generation=5
            )
        self.assertEqual(res.status, FrameStatus.FAILED)
        self.assertEqual(res.generation, 5)
        self.assertIn("Unsupported tensor shape", res.error)
        self.assertTrue(any("Detection frame 5 failed" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
