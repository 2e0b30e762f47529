from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from stationview.domain.record import WeatherRecord
from stationview.errors import FetchError

# epoch values at or above this are taken as milliseconds
_MILLIS_THRESHOLD = 100_000_000_000


def parse_time(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or an epoch (seconds or milliseconds) value."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return _from_epoch(float(value))
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            number = None
        if number is not None:
            return _from_epoch(number)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    return None


def _from_epoch(value: float) -> datetime | None:
    if not math.isfinite(value):
        return None
    seconds = value / 1000.0 if abs(value) >= _MILLIS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _number(raw: dict, *keys: str) -> float:
    for key in keys:
        if key in raw and raw[key] is not None:
            value = raw[key]
            if isinstance(value, bool):
                break
            try:
                return float(value)
            except (TypeError, ValueError):
                break
    raise FetchError(f"record field {keys[0]!r} missing or not numeric: {raw!r}")


class WeatherRecordParser:
    """Convert one decoded JSON object into a ``WeatherRecord``.

    Rows that cannot be parsed raise ``FetchError``; a fetch either yields a
    fully valid series or fails.
    """

    def parse(self, raw: Any) -> WeatherRecord:
        if not isinstance(raw, dict):
            raise FetchError(f"record must be a JSON object, got {type(raw).__name__}")
        parsed_time = parse_time(raw.get("time"))
        if parsed_time is None:
            raise FetchError(f"record time missing or unparseable: {raw.get('time')!r}")
        return WeatherRecord(
            time=parsed_time,
            humidity=_number(raw, "humidity"),
            luminosity=_number(raw, "lux", "luminosity"),
            temperature=_number(raw, "temperature"),
            pressure=_number(raw, "pressure"),
        )
