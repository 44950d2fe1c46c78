# src/history/reconciler.py

"""Keep a client-side price series day-unique as new prices arrive."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from zoneinfo import ZoneInfo

from src.config.settings import Settings
from src.models.observation import Observation, ensure_aware

logger = logging.getLogger("price_tracker.history")


def calendar_day(obs: Observation, tz_name: str | None = None) -> date:
    """Return the calendar day of *obs* in the reference time zone."""
    tz = ZoneInfo(tz_name or Settings.DAY_TIMEZONE)
    return ensure_aware(obs.time).astimezone(tz).date()


def merge(
    series: Sequence[Observation],
    incoming: Observation | None = None,
) -> list[Observation]:
    """Merge one observation into a day-unique, time-ordered series.

    Any existing observation on the same calendar day is replaced, so
    the most recently merged price for a day wins. A missing
    observation (or one without a time) leaves the series unchanged.
    A new list is always returned; *series* is not modified.
    """
    if incoming is None or getattr(incoming, "time", None) is None:
        return list(series)

    day = calendar_day(incoming)
    kept = [obs for obs in series if calendar_day(obs) != day]
    if len(kept) != len(series):
        logger.debug(
            "Replacing %d observation(s) on %s with price %.2f",
            len(series) - len(kept),
            day.isoformat(),
            incoming.price,
        )

    kept.append(incoming)
    kept.sort(key=lambda o: ensure_aware(o.time))
    return kept


def build_series(observations: Iterable[Observation]) -> list[Observation]:
    """Fold raw observations into a series; later items win per day."""
    series: list[Observation] = []
    raw_count = 0
    for obs in observations:
        series = merge(series, obs)
        raw_count += 1

    if raw_count != len(series):
        logger.info(
            "Collapsed %d raw observations into %d daily points",
            raw_count,
            len(series),
        )
    return series
