# tests/conftest.py

"""Shared pytest fixtures for all price_tracker tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_output_dirs(tmp_path: Path) -> Generator[None, None, None]:
    """Redirect logs and exported charts into a per-test temp dir."""
    with patch.object(Settings, "LOGS_DIR", tmp_path / "logs"), \
            patch.object(Settings, "CHARTS_DIR", tmp_path / "charts"):
        yield
