# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path
from zoneinfo import ZoneInfo

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants and the range table."""

    def test_chart_box_is_positive(self) -> None:
        """Drawing box dimensions must be positive."""
        self.assertGreater(Settings.CHART_WIDTH, 0)
        self.assertGreater(Settings.CHART_HEIGHT, 0)
        self.assertGreaterEqual(Settings.AXIS_HEIGHT, 0)

    def test_view_height_includes_axis_band(self) -> None:
        self.assertEqual(
            Settings.VIEW_HEIGHT,
            Settings.CHART_HEIGHT + Settings.AXIS_HEIGHT,
        )

    def test_padding_ratios(self) -> None:
        self.assertEqual(Settings.SPREAD_PAD_RATIO, 0.2)
        self.assertEqual(Settings.FLAT_PAD_RATIO, 0.05)
        self.assertGreater(Settings.MIN_FLAT_PAD, 0)

    def test_range_keys_are_unique(self) -> None:
        keys = [r["key"] for r in Settings.RANGE_OPTIONS]
        self.assertEqual(len(keys), len(set(keys)))

    def test_each_range_has_required_keys(self) -> None:
        """Every range must have key, label, and days."""
        for option in Settings.RANGE_OPTIONS:
            with self.subTest(option=option.get("key", "?")):
                self.assertIn("key", option)
                self.assertIn("label", option)
                self.assertIn("days", option)

    def test_only_all_is_unbounded(self) -> None:
        unbounded = [
            r["key"] for r in Settings.RANGE_OPTIONS if r["days"] is None
        ]
        self.assertEqual(unbounded, ["all"])

    def test_default_range_is_registered(self) -> None:
        keys = {r["key"] for r in Settings.RANGE_OPTIONS}
        self.assertIn(Settings.DEFAULT_RANGE, keys)

    def test_time_zones_resolve(self) -> None:
        """Configured zone names must be valid IANA zones."""
        ZoneInfo(Settings.DAY_TIMEZONE)
        ZoneInfo(Settings.LABEL_TIMEZONE)

    def test_history_endpoint_has_placeholder(self) -> None:
        self.assertIn("{product_id}", Settings.HISTORY_ENDPOINT)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.CHARTS_DIR, Path)


if __name__ == "__main__":
    unittest.main()
