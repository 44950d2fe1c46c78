# src/storage/chart_exporter.py

"""Generate interactive Plotly HTML charts from a price series."""

import importlib
import logging
import webbrowser
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from src.charts.scale_mapper import map_series
from src.config.settings import Settings
from src.models.chart_geometry import ChartGeometry
from src.models.observation import Observation, ensure_aware

logger = logging.getLogger("price_tracker.export")


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _ensure_charts_dir(charts_dir: Path | None) -> Path:
    """Create the charts directory if it doesn't exist."""
    directory = charts_dir or Settings.CHARTS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _slugify(title: str) -> str:
    return (
        title[:30]
        .strip()
        .replace(" ", "_")
        .replace("/", "_")
    ) or "price_history"


def build_price_figure(
    series: Sequence[Observation],
    title: str,
    geometry: ChartGeometry,
    currency: str | None = None,
) -> Any:
    """Build a Plotly line chart annotated with the low / high labels.

    The y-axis uses the padded price domain from *geometry* so the
    HTML chart matches the dashboard's scaling.
    """
    go = _get_plotly_go()
    ordered = sorted(series, key=lambda o: ensure_aware(o.time))
    dates = [ensure_aware(o.time) for o in ordered]
    prices = [o.price for o in ordered]
    unit = currency or ""

    fig: Any = go.Figure()
    fig.add_trace(go.Scatter(
        x=dates,
        y=prices,
        mode="lines+markers",
        name=title[:50],
        fill="tozeroy" if len(ordered) > 1 else None,
        hovertemplate=(
            "%{x|%Y-%m-%d %H:%M}<br>"
            f"Price: %{{y:.2f}} {unit}"
            "<extra></extra>"
        ),
    ))

    low_idx = prices.index(min(prices))
    high_idx = prices.index(max(prices))
    fig.add_annotation(
        x=dates[low_idx], y=prices[low_idx],
        text=f"Low: {geometry.min_label}",
        showarrow=True, arrowhead=2,
    )
    if high_idx != low_idx:
        fig.add_annotation(
            x=dates[high_idx], y=prices[high_idx],
            text=f"High: {geometry.max_label}",
            showarrow=True, arrowhead=2,
        )

    fig.update_layout(
        title=f"Price History: {title[:60]} (last {geometry.last_label})",
        xaxis_title="Date",
        yaxis_title=f"Price ({unit})" if unit else "Price",
        yaxis={"range": [geometry.chart_min, geometry.chart_max]},
        hovermode="x unified",
        template="plotly_white",
    )
    return fig


def export_price_chart(
    series: Sequence[Observation],
    title: str,
    currency: str | None = None,
    charts_dir: Path | None = None,
    open_browser: bool = True,
) -> Path | None:
    """Export a product's price chart as a standalone HTML file.

    Returns the written path, or ``None`` when there is nothing to draw.
    """
    if not series:
        logger.warning("No observations to chart for %s", title[:60])
        return None

    geometry = map_series(series, currency)
    fig = build_price_figure(series, title, geometry, currency)

    directory = _ensure_charts_dir(charts_dir)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = directory / f"{_slugify(title)}_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath
