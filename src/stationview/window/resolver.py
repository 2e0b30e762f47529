from __future__ import annotations

import logging
import math
from typing import Union

from stationview.domain.window import HoursInput, WindowSpec
from stationview.errors import InvalidPresetError, NotANumberError, OutOfRangeError

logger = logging.getLogger(__name__)

SAMPLES_PER_HOUR = 6  # one sample every 10 minutes
MAX_CUSTOM_HOURS = 2160  # 90 days, exclusive

PRESET_HOURS: dict[str, int] = {
    "QuarterYear": 2160,
    "Month": 720,
    "Week": 168,
    "Day": 24,
}

# +1 because preset bounds are inclusive on both ends
PRESET_SAMPLE_COUNTS: dict[str, int] = {
    name: hours * SAMPLES_PER_HOUR + 1 for name, hours in PRESET_HOURS.items()
}

PRESET_NAMES: tuple[str, ...] = tuple(PRESET_HOURS)
DEFAULT_PRESET = "QuarterYear"


class _NoOp:
    """Marker returned when custom input was cancelled or left empty."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NoOp"

    def __bool__(self) -> bool:
        return False


NoOp = _NoOp()

Resolution = Union[int, _NoOp]


def _parse_hours(hours_text: HoursInput) -> Union[float, _NoOp]:
    if hours_text is None:
        return NoOp
    if isinstance(hours_text, bool):
        raise NotANumberError(hours_text)
    if isinstance(hours_text, (int, float)):
        value = float(hours_text)
    else:
        text = str(hours_text)
        if text == "":
            return NoOp
        try:
            value = float(text.strip())
        except ValueError:
            raise NotANumberError(hours_text) from None
    if math.isnan(value):
        raise NotANumberError(hours_text)
    return value


class WindowResolver:
    """Turn window requests into sample counts and remember the last one."""

    def __init__(self, default_preset: str = DEFAULT_PRESET) -> None:
        if default_preset not in PRESET_SAMPLE_COUNTS:
            raise InvalidPresetError(f"unknown window preset: {default_preset!r}")
        self._last = PRESET_SAMPLE_COUNTS[default_preset]

    def resolve_preset(self, name: str) -> int:
        try:
            count = PRESET_SAMPLE_COUNTS[name]
        except (KeyError, TypeError):
            raise InvalidPresetError(f"unknown window preset: {name!r}") from None
        self._last = count
        logger.debug("preset %s resolved to %d samples", name, count)
        return count

    def resolve_custom(self, hours_text: HoursInput) -> Resolution:
        hours = _parse_hours(hours_text)
        if hours is NoOp:
            return NoOp
        if hours <= 0 or hours >= MAX_CUSTOM_HOURS:
            raise OutOfRangeError(hours)
        count = max(1, math.floor(hours * SAMPLES_PER_HOUR))
        self._last = count
        logger.debug("custom window of %s hours resolved to %d samples", hours, count)
        return count

    def resolve_last(self) -> int:
        return self._last

    def resolve(self, spec: WindowSpec) -> Resolution:
        if spec.is_preset:
            return self.resolve_preset(spec.preset)
        if spec.custom:
            return self.resolve_custom(spec.hours)
        return self.resolve_last()


def parse_window(text: str | None) -> WindowSpec:
    """Map a command-line window argument onto a spec.

    Preset names match case-insensitively; anything else is taken as hours.
    """
    if text is None:
        return WindowSpec.last()
    lowered = text.strip().lower()
    for name in PRESET_NAMES:
        if name.lower() == lowered:
            return WindowSpec.of_preset(name)
    return WindowSpec.of_hours(text)
