# main.py

"""Entry point for the price_tracker headless chart CLI."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("price_tracker.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    range_keys = [str(r["key"]) for r in Settings.RANGE_OPTIONS]

    parser = argparse.ArgumentParser(
        prog="price_tracker",
        description="Window, reconcile and chart a product's price history.",
        epilog=f"Available ranges: {', '.join(range_keys)}",
    )
    parser.add_argument(
        "history_file",
        help="JSON price-history payload ({productId, points} or a list).",
    )
    parser.add_argument(
        "-r",
        "--range",
        choices=range_keys,
        default=Settings.DEFAULT_RANGE,
        dest="range_key",
        help=f"History window (default: {Settings.DEFAULT_RANGE}).",
    )
    parser.add_argument(
        "--now",
        default=None,
        dest="now_raw",
        help="ISO-8601 reference time for the window (default: current UTC).",
    )
    parser.add_argument(
        "--add",
        default=None,
        dest="add_raw",
        help='Freshly fetched observation, e.g. \'{"t": "...", "price": 9.5}\'.',
    )
    parser.add_argument(
        "-c",
        "--currency",
        default=None,
        help="Currency code for labels (default: taken from the history).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        default=False,
        help="Export an interactive HTML chart of the window.",
    )
    parser.add_argument(
        "--no-browser",
        action="store_false",
        default=True,
        dest="open_browser",
        help="Do not open the exported chart in a browser.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the history pipeline and exit."""
    log_file = setup_logging()
    logger.info("price_tracker starting, log file: %s", log_file)

    args = _build_parser().parse_args(argv)

    from src.cli.runner import run_history

    exit_code = run_history(
        history_file=args.history_file,
        range_key=args.range_key,
        now_raw=args.now_raw,
        add_raw=args.add_raw,
        currency=args.currency,
        output_format=args.output_format,
        chart=args.chart,
        open_browser=args.open_browser,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
