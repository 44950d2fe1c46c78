# src/storage/history_file.py

"""Read saved price-history query results from disk."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from src.models.errors import InvalidObservation
from src.models.observation import Observation, parse_history_response

logger = logging.getLogger("price_tracker.storage")


@dataclass
class HistoryPayload:
    """Observations loaded from a history file plus its product id."""

    product_id: str
    observations: list[Observation]


def load_history(filepath: Path) -> HistoryPayload:
    """Load a ``{productId, points}`` (or bare list) JSON history file.

    The product id falls back to the file stem when the payload has
    none. Raises ``InvalidObservation`` for malformed JSON or points.
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            data: object = json.load(f)
    except json.JSONDecodeError as exc:
        msg = f"History file {filepath.name} is not valid JSON: {exc}"
        raise InvalidObservation(msg) from exc

    product_id = filepath.stem
    if isinstance(data, dict):
        envelope = cast(dict[str, object], data)
        product_id = str(envelope.get("productId") or product_id)

    observations = parse_history_response(data)
    logger.info(
        "Loaded %d observations for %s from %s",
        len(observations),
        product_id,
        filepath,
    )
    return HistoryPayload(product_id=product_id, observations=observations)
