import json
import tempfile
import unittest
from fractions import Fraction
from pathlib import Path

from Retina_Assist.config import AssistProfile, load_assist_profile
from Retina_Assist.narration import RUPEE_CLASS_VALUES


class TestAssistProfile(unittest.TestCase):
    def _write_profile(self, payload: object) -> Path:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / "profile.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_load_ok(self) -> None:
        path = self._write_profile(
            {
                "schema_version": 1,
                "depth": {
                    "band_start": 0.3,
                    "band_end": 0.7,
                    "stride": 2,
                    "min_valid_mm": 150,
                    "max_valid_mm": 4000,
                    "left_fraction": 0.25,
                    "center_fraction": 0.5,
                },
                "navigation": {"stop_threshold_mm": 1000, "warn_threshold_mm": 1800},
                "announcement": {"cooldown_s": 2},
                "decoder": {"default_threshold": 0.4, "class_thresholds": {"4": 0.25, "5": 0.5}},
                "resolver": {"duplicate_iou": 0.7, "conflict_iou": 0.85, "max_detections": None},
                "class_names": {"0": "person", "1": "chair"},
                "notes": "currency reader",
            }
        )
        profile = load_assist_profile(path)
        self.assertIsInstance(profile, AssistProfile)
        self.assertEqual(profile.depth.stride, 2)
        self.assertEqual(profile.depth.band_rows(100), (30, 70))
        self.assertEqual(profile.depth.left_fraction, Fraction(1, 4))
        self.assertEqual(profile.navigation.warn_threshold_mm, 1800)
        self.assertEqual(profile.announcement.cooldown_s, 2.0)
        self.assertEqual(profile.postprocess.decoder.class_thresholds, {4: 0.25, 5: 0.5})
        self.assertEqual(profile.postprocess.decoder.threshold_for(1), 0.4)
        self.assertEqual(profile.postprocess.resolver.conflict_iou, 0.85)
        self.assertIsNone(profile.postprocess.resolver.max_detections)
        self.assertEqual(profile.class_names, {0: "person", 1: "chair"})
        self.assertEqual(profile.class_values, RUPEE_CLASS_VALUES)
        self.assertEqual(profile.notes, "currency reader")

    def test_missing_sections_use_defaults(self) -> None:
        profile = load_assist_profile(self._write_profile({"schema_version": 1}))
        self.assertEqual(profile, AssistProfile())
        self.assertEqual(profile.depth.stride, 4)
        self.assertEqual(profile.navigation.stop_threshold_mm, 900)
        self.assertEqual(profile.postprocess.resolver.duplicate_iou, 0.70)

    def test_unknown_keys_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "extra": 123}))
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "depth": {"step": 4}}))

    def test_strict_threshold_flag(self) -> None:
        profile = load_assist_profile(
            self._write_profile({"schema_version": 1, "decoder": {"threshold_inclusive": False}})
        )
        self.assertFalse(profile.postprocess.decoder.threshold_inclusive)
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "decoder": {"threshold_inclusive": 0}}))

    def test_wrong_types_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "depth": {"stride": 2.5}}))
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "resolver": {"conflict_iou": True}}))
        with self.assertRaises(ValueError):
            load_assist_profile(
                self._write_profile({"schema_version": 1, "decoder": {"class_thresholds": {"fifty": 0.2}}})
            )
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "class_values": [10, "100"]}))

    def test_invalid_values_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 2}))
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"schema_version": 1, "resolver": {"duplicate_iou": 1.5}}))

    def test_missing_schema_version(self) -> None:
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile({"notes": "x"}))

    def test_not_an_object(self) -> None:
        with self.assertRaises(ValueError):
            load_assist_profile(self._write_profile([1, 2, 3]))

    def test_invalid_json(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_assist_profile(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_assist_profile(Path("does/not/exist.json"))


if __name__ == "__main__":
    unittest.main()
