# src/models/observation.py

"""Price observation model and parsing of the history wire format."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, cast

from src.models.errors import InvalidObservation


@dataclass(frozen=True)
class Observation:
    """A single timestamped price reading for a tracked product."""

    time: datetime
    price: float
    currency: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise to the ``{t, price, currency?}`` wire shape."""
        data: dict[str, object] = {
            "t": format_timestamp(self.time),
            "price": self.price,
        }
        if self.currency:
            data["currency"] = self.currency
        return data


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO-8601 timestamp string into an aware datetime.

    Accepts what ``datetime.fromisoformat`` reads on Python 3.11+:
    extended (``2024-01-01T08:30:00``) and basic (``20240101T083000``)
    forms, optional fractional seconds, and a ``Z`` or ``±HH:MM``
    offset. Week dates and fractional hours are rejected.
    """
    if isinstance(raw, datetime):
        return ensure_aware(raw)
    if not isinstance(raw, str) or not raw.strip():
        msg = f"Missing or non-string timestamp: {raw!r}"
        raise InvalidObservation(msg)

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        msg = f"Unparseable timestamp: {raw!r}"
        raise InvalidObservation(msg) from exc
    return ensure_aware(parsed)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601, using ``Z`` for UTC."""
    aware = ensure_aware(value)
    text = aware.isoformat()
    if aware.utcoffset() == timedelta(0):
        text = text.removesuffix("+00:00") + "Z"
    return text


def parse_price(raw: object) -> float:
    """Validate a price value: a finite, non-negative number."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        msg = f"Price must be a number, got {raw!r}"
        raise InvalidObservation(msg)
    try:
        price = float(raw)
    except ValueError as exc:
        msg = f"Unparseable price: {raw!r}"
        raise InvalidObservation(msg) from exc
    if not math.isfinite(price) or price < 0:
        msg = f"Price must be finite and non-negative, got {raw!r}"
        raise InvalidObservation(msg)
    return price


def parse_observation(raw: dict[str, Any]) -> Observation:
    """Build an :class:`Observation` from a ``{t, price, currency?}`` dict."""
    if not isinstance(raw, dict):
        msg = f"Observation must be an object, got {type(raw).__name__}"
        raise InvalidObservation(msg)

    currency = raw.get("currency")
    return Observation(
        time=parse_timestamp(raw.get("t")),
        price=parse_price(raw.get("price")),
        currency=str(currency) if currency else None,
    )


def parse_history_response(payload: object) -> list[Observation]:
    """Parse a price-history query result into observations.

    Accepts either a bare list of points or the server envelope
    ``{"productId": ..., "points": [...]}``. Raw order is preserved;
    building a day-unique series is the reconciler's job.
    """
    points: object = payload
    if isinstance(payload, dict):
        envelope = cast(dict[str, object], payload)
        points = envelope.get("points", [])

    if not isinstance(points, list):
        msg = "History payload must contain a list of points"
        raise InvalidObservation(msg)

    items = cast(list[dict[str, Any]], points)
    return [parse_observation(item) for item in items]
