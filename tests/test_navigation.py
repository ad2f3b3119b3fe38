import unittest

from Retina_Assist.depth import NO_READING, ZoneAverage, ZoneReading
from Retina_Assist.navigation import NavigationConfig, NavigationDirective, decide_directive


class TestDecideDirective(unittest.TestCase):
    def test_stop_wins_regardless_of_sides(self) -> None:
        for left, right in [(100, 100), (3000, 3000), (800, 4000), (NO_READING, NO_READING)]:
            self.assertEqual(decide_directive((left, 899, right)), NavigationDirective.STOP)

    def test_stop_threshold_is_strict(self) -> None:
        self.assertEqual(decide_directive((3000, 900, 3000)), NavigationDirective.CLEAR)

    def test_warn_left(self) -> None:
        self.assertEqual(decide_directive((1200, 3000, 2500)), NavigationDirective.WARN_LEFT)

    def test_warn_right(self) -> None:
        self.assertEqual(decide_directive((2500, 3000, 1200)), NavigationDirective.WARN_RIGHT)

    def test_both_sides_close_is_clear(self) -> None:
        self.assertEqual(decide_directive((1200, 3000, 1200)), NavigationDirective.CLEAR)

    def test_side_at_warn_threshold_is_not_a_warning(self) -> None:
        self.assertEqual(decide_directive((1500, 3000, 2500)), NavigationDirective.CLEAR)
        self.assertEqual(decide_directive((1200, 3000, 1500)), NavigationDirective.CLEAR)

    def test_unknown_zones_count_as_far(self) -> None:
        self.assertEqual(decide_directive((1000, NO_READING, NO_READING)), NavigationDirective.WARN_LEFT)
        self.assertEqual(
            decide_directive((NO_READING, NO_READING, NO_READING)), NavigationDirective.CLEAR
        )

    def test_accepts_zone_reading(self) -> None:
        reading = ZoneReading(
            left=ZoneAverage(sum=4000, count=2),
            center=ZoneAverage(),
            right=ZoneAverage(sum=2400, count=2),
        )
        self.assertEqual(decide_directive(reading), NavigationDirective.WARN_RIGHT)

    def test_custom_thresholds(self) -> None:
        cfg = NavigationConfig(stop_threshold_mm=1200, warn_threshold_mm=2000)
        self.assertEqual(decide_directive((3000, 1100, 3000), cfg), NavigationDirective.STOP)
        self.assertEqual(decide_directive((1800, 3000, 2500), cfg), NavigationDirective.WARN_LEFT)

    def test_invalid_config(self) -> None:
        with self.assertRaises(ValueError):
            NavigationConfig(stop_threshold_mm=0)


class TestDirectiveFeedback(unittest.TestCase):
    def test_phrases(self) -> None:
        self.assertEqual(NavigationDirective.STOP.phrase, "Stop.")
        self.assertEqual(NavigationDirective.WARN_LEFT.phrase, "Obstacle Left.")
        self.assertEqual(NavigationDirective.WARN_RIGHT.phrase, "Obstacle Right.")
        self.assertIsNone(NavigationDirective.CLEAR.phrase)

    def test_only_stop_vibrates(self) -> None:
        self.assertTrue(NavigationDirective.STOP.haptic)
        self.assertFalse(NavigationDirective.WARN_LEFT.haptic)
        self.assertFalse(NavigationDirective.CLEAR.haptic)


if __name__ == "__main__":
    unittest.main()
