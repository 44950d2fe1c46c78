# src/charts/scale_mapper.py

"""Map a price series onto a fixed drawing box.

Produces SVG-syntax line/area paths, a marker for single-point series,
x-axis date ticks and pre-formatted low / high / last labels. The
mapping is pure: the input series is never mutated and no I/O happens.
"""

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from src.config.settings import Settings
from src.models.chart_geometry import AxisTick, ChartGeometry, ChartPoint
from src.models.errors import InvalidObservation
from src.models.observation import Observation, ensure_aware

logger = logging.getLogger("price_tracker.chart")

_MONTHS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_SECONDS_PER_DAY = 86_400


def format_price(value: float, currency: str | None = None) -> str:
    """Format a price with two decimals, prefixed by its currency code."""
    if currency:
        return f"{currency} {value:.2f}"
    return f"{value:.2f}"


def _format_coord(value: float) -> str:
    """Render a coordinate compactly (``300``, ``166.667``)."""
    digits = Settings.COORD_PRECISION
    # + 0.0 turns -0.0 into 0.0
    text = f"{round(value, digits) + 0.0:.{digits}f}"
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def _validated(series: Sequence[Observation]) -> list[Observation]:
    """Reject observations that would produce NaN geometry."""
    checked: list[Observation] = []
    for obs in series:
        if not isinstance(obs.time, datetime):
            msg = f"Observation time is not a datetime: {obs.time!r}"
            raise InvalidObservation(msg)
        if isinstance(obs.price, Decimal):
            finite = obs.price.is_finite()
        elif isinstance(obs.price, (int, float)) and not isinstance(
            obs.price, bool,
        ):
            finite = math.isfinite(obs.price)
        else:
            finite = False
        if not finite:
            msg = f"Observation price is not a finite number: {obs.price!r}"
            raise InvalidObservation(msg)
        checked.append(obs)
    return checked


def _price_padding(min_price: float, max_price: float) -> float:
    """Vertical headroom so flat series still get a visible range."""
    spread = max_price - min_price
    if spread == 0:
        return max(Settings.MIN_FLAT_PAD, min_price * Settings.FLAT_PAD_RATIO)
    return spread * Settings.SPREAD_PAD_RATIO


def _format_tick_date(epoch: float, include_year: bool, tz: ZoneInfo) -> str:
    """Short calendar date, e.g. ``Mar 3`` or ``Mar 3, 2024``."""
    local = datetime.fromtimestamp(epoch, tz=timezone.utc).astimezone(tz)
    label = f"{_MONTHS[local.month - 1]} {local.day}"
    if include_year:
        label = f"{label}, {local.year}"
    return label


def _needs_year(min_time: float, max_time: float, tz: ZoneInfo) -> bool:
    """Show the year when the endpoints straddle years or span ~a year."""
    first = datetime.fromtimestamp(min_time, tz=timezone.utc).astimezone(tz)
    last = datetime.fromtimestamp(max_time, tz=timezone.utc).astimezone(tz)
    span_days = (max_time - min_time) / _SECONDS_PER_DAY
    return (
        first.year != last.year
        or span_days > Settings.YEAR_LABEL_SPAN_DAYS
    )


def map_series(
    series: Sequence[Observation],
    currency: str | None = None,
    *,
    width: float | None = None,
    height: float | None = None,
) -> ChartGeometry:
    """Compute chart geometry for *series* inside a ``width x height`` box.

    Args:
        series: Observations in any order.
        currency: Optional code prefixed to the summary labels.
        width: Plot width; defaults to ``Settings.CHART_WIDTH``.
        height: Plot height (excluding the axis band); defaults to
            ``Settings.CHART_HEIGHT``.

    Returns:
        The derived :class:`ChartGeometry`, empty for an empty series.

    Raises:
        InvalidObservation: If any observation has a non-datetime time
            or a non-finite price.
    """
    box_w = float(width if width is not None else Settings.CHART_WIDTH)
    box_h = float(height if height is not None else Settings.CHART_HEIGHT)

    if not series:
        return ChartGeometry.empty()

    # Price breaks ties between same-instant points
    ordered = sorted(
        _validated(series),
        key=lambda o: (ensure_aware(o.time), float(o.price)),
    )
    times = [ensure_aware(o.time).timestamp() for o in ordered]
    prices = [float(o.price) for o in ordered]

    min_time, max_time = times[0], times[-1]
    min_price, max_price = min(prices), max(prices)
    padding = _price_padding(min_price, max_price)
    chart_min = min_price - padding
    chart_max = max_price + padding

    def map_x(epoch: float) -> float:
        if max_time == min_time:
            return box_w / 2
        return (epoch - min_time) / (max_time - min_time) * box_w

    def map_y(price: float) -> float:
        if chart_max == chart_min:
            return box_h / 2
        return box_h - (price - chart_min) / (chart_max - chart_min) * box_h

    coords = [
        f"{_format_coord(map_x(t))},{_format_coord(map_y(p))}"
        for t, p in zip(times, prices)
    ]
    line_path = "M " + " L ".join(coords)
    area_path = (
        f"{line_path} L {_format_coord(box_w)},{_format_coord(box_h)}"
        f" L 0,{_format_coord(box_h)} Z"
    )

    single_point = None
    if len(ordered) == 1:
        single_point = ChartPoint(x=map_x(times[0]), y=map_y(prices[0]))

    label_tz = ZoneInfo(Settings.LABEL_TIMEZONE)
    include_year = _needs_year(min_time, max_time, label_tz)
    if min_time == max_time:
        tick_times = [min_time]
    else:
        tick_times = [
            min_time,
            min_time + (max_time - min_time) / 2,
            max_time,
        ]
    ticks = tuple(
        AxisTick(
            position=map_x(t),
            label=_format_tick_date(t, include_year, label_tz),
        )
        for t in tick_times
    )

    logger.debug(
        "Mapped %d observations: price domain [%.2f, %.2f], %d ticks",
        len(ordered),
        chart_min,
        chart_max,
        len(ticks),
    )

    return ChartGeometry(
        line_path=line_path,
        area_path=area_path,
        single_point=single_point,
        min_label=format_price(min_price, currency),
        max_label=format_price(max_price, currency),
        last_label=format_price(prices[-1], currency),
        axis_ticks=ticks,
        chart_min=chart_min,
        chart_max=chart_max,
    )
