# src/models/chart_geometry.py

"""Derived chart geometry, history windows and summary statistics."""

from dataclasses import asdict, dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RangeOption:
    """A named history window; ``days`` is ``None`` for all time."""

    key: str
    label: str
    days: int | None


@dataclass(frozen=True)
class TimeBounds:
    """Concrete time bounds for a window. ``start`` of ``None`` is open."""

    start: datetime | None
    end: datetime


@dataclass(frozen=True)
class ChartPoint:
    """A coordinate in draw space (origin top-left, y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class AxisTick:
    """An x-axis tick position with its pre-formatted date label."""

    position: float
    label: str


@dataclass(frozen=True)
class ChartGeometry:
    """Drawing primitives for one price series.

    Paths use SVG path syntax (``M``, ``L``, ``Z``) so any renderer
    can consume them. An empty geometry means "render the empty state".
    """

    line_path: str = ""
    area_path: str = ""
    single_point: ChartPoint | None = None
    min_label: str = ""
    max_label: str = ""
    last_label: str = ""
    axis_ticks: tuple[AxisTick, ...] = field(default_factory=tuple)
    chart_min: float | None = None
    chart_max: float | None = None

    @classmethod
    def empty(cls) -> "ChartGeometry":
        """Geometry for a series with no observations."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.line_path

    def to_dict(self) -> dict[str, object]:
        """Plain-dict form for JSON output."""
        data = asdict(self)
        data["axis_ticks"] = [asdict(t) for t in self.axis_ticks]
        return data


@dataclass(frozen=True)
class PriceStats:
    """Min / max / mean over the prices of a windowed series."""

    min: float
    max: float
    mean: float
    count: int
