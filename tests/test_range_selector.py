# tests/test_range_selector.py

"""Tests for resolving named history windows."""

import unittest
from datetime import datetime, timezone

from src.history.range_selector import (
    available_ranges,
    build_history_query,
    filter_series,
    range_option,
    resolve_window,
)
from src.models.chart_geometry import TimeBounds
from src.models.errors import InvalidRangeKey
from src.models.observation import Observation, parse_timestamp

NOW = datetime(2024, 3, 10, tzinfo=timezone.utc)


def _at(ts: str, price: float = 1.0) -> Observation:
    return Observation(time=parse_timestamp(ts), price=price)


class TestResolveWindow(unittest.TestCase):
    """Tests for resolve_window()."""

    def test_seven_days(self) -> None:
        bounds = resolve_window("7d", NOW)
        self.assertEqual(
            bounds,
            TimeBounds(
                start=datetime(2024, 3, 3, tzinfo=timezone.utc), end=NOW,
            ),
        )

    def test_all_has_open_start(self) -> None:
        self.assertEqual(
            resolve_window("all", NOW), TimeBounds(start=None, end=NOW),
        )

    def test_every_bounded_key(self) -> None:
        for key, days in (("7d", 7), ("30d", 30), ("90d", 90), ("365d", 365)):
            with self.subTest(key=key):
                bounds = resolve_window(key, NOW)
                assert bounds.start is not None
                self.assertEqual((bounds.end - bounds.start).days, days)

    def test_unknown_key_raises(self) -> None:
        with self.assertRaises(InvalidRangeKey):
            resolve_window("14d", NOW)

    def test_invalid_key_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            resolve_window("", NOW)

    def test_naive_now_treated_as_utc(self) -> None:
        bounds = resolve_window("30d", datetime(2024, 3, 10))
        self.assertEqual(bounds.end, NOW)

    def test_deterministic(self) -> None:
        self.assertEqual(resolve_window("90d", NOW), resolve_window("90d", NOW))


class TestRangeOptions(unittest.TestCase):
    """Tests for the fixed range table."""

    def test_keys_in_display_order(self) -> None:
        keys = [o.key for o in available_ranges()]
        self.assertEqual(keys, ["7d", "30d", "90d", "365d", "all"])

    def test_lookup(self) -> None:
        option = range_option("365d")
        self.assertEqual(option.label, "1 year")
        self.assertEqual(option.days, 365)
        self.assertIsNone(range_option("all").days)

    def test_lookup_unknown(self) -> None:
        with self.assertRaises(InvalidRangeKey):
            range_option("forever")


class TestFilterSeries(unittest.TestCase):
    """Tests for filter_series()."""

    def test_keeps_points_inside_window(self) -> None:
        series = [
            _at("2024-03-01T00:00:00Z"),
            _at("2024-03-03T00:00:00Z"),
            _at("2024-03-09T12:00:00Z"),
            _at("2024-03-11T00:00:00Z"),
        ]
        kept = filter_series(series, resolve_window("7d", NOW))
        self.assertEqual(kept, series[1:3])

    def test_open_start_keeps_history(self) -> None:
        series = [_at("2001-01-01T00:00:00Z"), _at("2024-03-10T00:00:00Z")]
        kept = filter_series(series, resolve_window("all", NOW))
        self.assertEqual(kept, series)

    def test_empty(self) -> None:
        self.assertEqual(filter_series([], resolve_window("7d", NOW)), [])


class TestBuildHistoryQuery(unittest.TestCase):
    """Tests for the history request path builder."""

    def test_bounded_window_has_params(self) -> None:
        self.assertEqual(
            build_history_query("abc", "7d", NOW),
            "/api/products/abc/prices"
            "?from=2024-03-03T00%3A00%3A00Z&to=2024-03-10T00%3A00%3A00Z",
        )

    def test_all_time_has_no_params(self) -> None:
        self.assertEqual(
            build_history_query("abc", "all", NOW),
            "/api/products/abc/prices",
        )

    def test_unknown_key_raises(self) -> None:
        with self.assertRaises(InvalidRangeKey):
            build_history_query("abc", "1w", NOW)


if __name__ == "__main__":
    unittest.main()
