# src/config/settings.py

"""Central configuration for the price_tracker chart engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_tracker chart engine."""

    # --- Drawing box ---
    CHART_WIDTH: int = 600              # Plot area width (draw units)
    CHART_HEIGHT: int = 200             # Plot area height (draw units)
    AXIS_HEIGHT: int = 36               # Band reserved below for x ticks
    VIEW_HEIGHT: int = CHART_HEIGHT + AXIS_HEIGHT
    COORD_PRECISION: int = 3            # Decimals kept in path strings

    # --- Scaling ---
    FLAT_PAD_RATIO: float = 0.05        # Pad for a zero-spread series
    SPREAD_PAD_RATIO: float = 0.2       # Pad as a share of the spread
    MIN_FLAT_PAD: float = 1.0
    YEAR_LABEL_SPAN_DAYS: int = 320     # Longer spans show the year

    # --- Time zones ---
    DAY_TIMEZONE: str = os.getenv("PRICE_DAY_TZ", "UTC")
    LABEL_TIMEZONE: str = os.getenv(
        "PRICE_LABEL_TZ", "America/New_York",
    )

    # --- History windows ---
    RANGE_OPTIONS: list[dict[str, str | int | None]] = [
        {"key": "7d", "label": "7 days", "days": 7},
        {"key": "30d", "label": "30 days", "days": 30},
        {"key": "90d", "label": "90 days", "days": 90},
        {"key": "365d", "label": "1 year", "days": 365},
        {"key": "all", "label": "All time", "days": None},
    ]
    DEFAULT_RANGE: str = "30d"
    HISTORY_ENDPOINT: str = "/api/products/{product_id}/prices"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
    DATA_DIR: Path = BASE_DIR / "data"
    CHARTS_DIR: Path = DATA_DIR / "charts"
