# src/config/logging_config.py

"""Per-run logging configuration for price_tracker.

Every CLI launch writes to its own ``logs/run_<timestamp>.log`` file.
All ``price_tracker.*`` loggers (chart mapping, history reconciliation,
export, CLI) propagate into that one file, while only warnings and
errors reach the terminal so stdout stays usable for JSON output.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

PROJECT_LOGGER = "price_tracker"

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_file_path(logs_dir: Path) -> Path:
    """Build the timestamped log file path inside *logs_dir*."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def setup_logging(
    logs_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> Path:
    """Attach file and console handlers to the ``price_tracker`` logger.

    Args:
        logs_dir: Directory for the run log. Defaults to
            ``Settings.LOGS_DIR``.
        console_level: Minimum level echoed to stderr.

    Returns:
        The path of the log file for this run.
    """
    directory = logs_dir or Settings.LOGS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = _log_file_path(directory)

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, re-entrant CLI runs) keep the first handlers
    if project_logger.handlers:
        for handler in project_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                return Path(handler.baseFilename)
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)

    project_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
