# src/cli/runner.py

"""Headless CLI runner: window, reconcile and chart a price history."""

import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.charts.scale_mapper import format_price, map_series
from src.history.range_selector import filter_series, resolve_window
from src.history.reconciler import build_series, merge
from src.history.stats import format_stats, summarize
from src.models.chart_geometry import ChartGeometry, PriceStats, TimeBounds
from src.models.errors import InvalidObservation, InvalidRangeKey
from src.models.observation import (
    Observation,
    format_timestamp,
    parse_observation,
    parse_timestamp,
)
from src.storage.history_file import load_history

logger = logging.getLogger("price_tracker.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


@dataclass
class HistoryView:
    """Everything a renderer needs for one product and window."""

    range_key: str
    bounds: TimeBounds
    series: list[Observation]
    geometry: ChartGeometry
    stats: PriceStats | None
    currency: str | None


def parse_incoming(raw: str | None) -> Observation | None:
    """Parse the ``--add`` JSON observation, if one was given."""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"--add is not valid JSON: {exc}"
        raise InvalidObservation(msg) from exc
    return parse_observation(data)


def _detect_currency(series: Sequence[Observation]) -> str | None:
    """Use the most recent currency code found in the series."""
    for obs in reversed(series):
        if obs.currency:
            return obs.currency
    return None


def build_view(
    observations: Sequence[Observation],
    range_key: str,
    now: datetime,
    incoming: Observation | None = None,
    currency: str | None = None,
) -> HistoryView:
    """Run the window → reconcile → map/summarise pipeline."""
    bounds = resolve_window(range_key, now)
    series = filter_series(build_series(observations), bounds)
    series = merge(series, incoming)
    unit = currency or _detect_currency(series)
    return HistoryView(
        range_key=range_key,
        bounds=bounds,
        series=series,
        geometry=map_series(series, unit),
        stats=summarize(series),
        currency=unit,
    )


def view_to_dict(view: HistoryView) -> dict[str, object]:
    """Serialise a view to plain dicts for JSON output."""
    stats: dict[str, object] | None = None
    if view.stats is not None:
        stats = {
            "min": view.stats.min,
            "max": view.stats.max,
            "mean": round(view.stats.mean, 2),
            "count": view.stats.count,
            "labels": format_stats(view.stats, view.currency),
        }
    return {
        "range": view.range_key,
        "from": (
            format_timestamp(view.bounds.start)
            if view.bounds.start is not None
            else None
        ),
        "to": format_timestamp(view.bounds.end),
        "points": [obs.to_dict() for obs in view.series],
        "geometry": view.geometry.to_dict(),
        "stats": stats,
    }


def _print_table(view: HistoryView, title: str) -> None:
    """Render a Rich table of the windowed series to stdout."""
    table = Table(
        title=f"Price History: {title}",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Time", style="magenta")
    table.add_column("Price", justify="right", style="green")

    for idx, obs in enumerate(view.series, 1):
        table.add_row(
            str(idx),
            format_timestamp(obs.time),
            format_price(obs.price, obs.currency or view.currency),
        )

    console = Console()
    console.print(table)
    if view.stats is not None:
        labels = format_stats(view.stats, view.currency)
        console.print(
            f"Low: {labels['low']}  "
            f"Avg: {labels['average']}  "
            f"High: {labels['high']}  "
            f"Last: {view.geometry.last_label}"
        )
    ticks = "  ".join(t.label for t in view.geometry.axis_ticks)
    if ticks:
        console.print(f"[dim]Axis: {ticks}[/dim]")


def run_history(
    history_file: str,
    range_key: str,
    now_raw: str | None = None,
    add_raw: str | None = None,
    currency: str | None = None,
    output_format: str = "json",
    chart: bool = False,
    open_browser: bool = True,
) -> int:
    """Load, window and chart a price history. Returns an exit code."""
    try:
        now = (
            parse_timestamp(now_raw)
            if now_raw is not None
            else datetime.now(timezone.utc)
        )
        payload = load_history(Path(history_file))
        incoming = parse_incoming(add_raw)
        view = build_view(
            payload.observations, range_key, now, incoming, currency,
        )
    except (InvalidObservation, InvalidRangeKey, OSError) as exc:
        logger.error("Cannot build price history view: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1

    if not view.series:
        _err.print("[yellow]No price history in this window yet.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(view.series)} daily prices"
        f" for {payload.product_id} ({range_key})[/green]"
    )

    if output_format == "table":
        _print_table(view, payload.product_id)
    else:
        json.dump(view_to_dict(view), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    if chart:
        from src.storage.chart_exporter import export_price_chart

        path = export_price_chart(
            view.series,
            payload.product_id,
            currency=view.currency,
            open_browser=open_browser,
        )
        if path is not None:
            _err.print(f"[dim]Chart saved → {path}[/dim]")

    return 0
