# src/history/range_selector.py

"""Resolve named history windows into concrete time bounds."""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from urllib.parse import urlencode

from src.config.settings import Settings
from src.models.chart_geometry import RangeOption, TimeBounds
from src.models.errors import InvalidRangeKey
from src.models.observation import Observation, ensure_aware, format_timestamp

logger = logging.getLogger("price_tracker.history")


def available_ranges() -> list[RangeOption]:
    """Return the configured range options in display order."""
    options: list[RangeOption] = []
    for row in Settings.RANGE_OPTIONS:
        days = row["days"]
        options.append(RangeOption(
            key=str(row["key"]),
            label=str(row["label"]),
            days=int(days) if days is not None else None,
        ))
    return options


def range_option(key: str) -> RangeOption:
    """Look up a range option by key.

    Raises ``InvalidRangeKey`` for keys outside the fixed table.
    """
    for option in available_ranges():
        if option.key == key:
            return option
    valid = ", ".join(o.key for o in available_ranges())
    msg = f"Unknown range key {key!r} (expected one of: {valid})"
    raise InvalidRangeKey(msg)


def resolve_window(key: str, now: datetime) -> TimeBounds:
    """Turn a range key into ``[start, end]`` bounds ending at *now*.

    ``now`` is passed in rather than read from the clock so results are
    reproducible. The ``all`` window has an open start.
    """
    option = range_option(key)
    end = ensure_aware(now)
    if option.days is None:
        return TimeBounds(start=None, end=end)
    return TimeBounds(start=end - timedelta(days=option.days), end=end)


def filter_series(
    series: Sequence[Observation],
    bounds: TimeBounds,
) -> list[Observation]:
    """Keep observations inside *bounds* (both ends inclusive)."""
    kept = [
        obs for obs in series
        if (bounds.start is None or ensure_aware(obs.time) >= bounds.start)
        and ensure_aware(obs.time) <= bounds.end
    ]
    if len(kept) != len(series):
        logger.debug(
            "Window filter dropped %d of %d observations",
            len(series) - len(kept),
            len(series),
        )
    return kept


def build_history_query(product_id: str, key: str, now: datetime) -> str:
    """Build the price-history request path for a product and window.

    Bounded windows carry ``from``/``to`` query parameters; the ``all``
    window omits them so the server returns the full history.
    """
    path = Settings.HISTORY_ENDPOINT.format(product_id=product_id)
    bounds = resolve_window(key, now)
    if bounds.start is None:
        return path
    params = urlencode({
        "from": format_timestamp(bounds.start),
        "to": format_timestamp(bounds.end),
    })
    return f"{path}?{params}"
