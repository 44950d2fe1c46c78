# src/history/stats.py

"""Summary statistics over a windowed price series."""

from collections.abc import Sequence

from src.charts.scale_mapper import format_price
from src.models.chart_geometry import PriceStats
from src.models.observation import Observation


def summarize(series: Sequence[Observation]) -> PriceStats | None:
    """Return min / max / arithmetic mean of the prices, or ``None``.

    The mean is unweighted: every observation counts once regardless
    of the gap to its neighbours.
    """
    if not series:
        return None

    low = high = float(series[0].price)
    total = 0.0
    for obs in series:
        price = float(obs.price)
        low = min(low, price)
        high = max(high, price)
        total += price

    return PriceStats(
        min=low,
        max=high,
        mean=total / len(series),
        count=len(series),
    )


def format_stats(
    stats: PriceStats, currency: str | None = None,
) -> dict[str, str]:
    """Pre-format the low / average / high labels for display."""
    return {
        "low": format_price(stats.min, currency),
        "average": format_price(stats.mean, currency),
        "high": format_price(stats.max, currency),
    }
