from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from stationview.config.options import URL_ENV_VAR
from stationview.config.station import StationConfig, StationContext


def cascade(*values, fallback=None):
    """Return the first non-None value from a list, or fallback."""
    for value in values:
        if value is not None:
            return value
    return fallback


def _normalize_lower(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text.lower() if text else None


def _normalize_upper(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, int):
        return logging.getLevelName(value).upper()
    text = str(value).strip()
    return text.upper() if text else None


@dataclass(frozen=True)
class LogLevelDecision:
    name: str
    value: int


def resolve_log_level(
    *levels: Any,
    fallback: str = "WARNING",
) -> LogLevelDecision:
    name = None
    for level in levels:
        normalized = _normalize_upper(level)
        if normalized:
            name = normalized
            break
    if not name:
        name = _normalize_upper(fallback) or "WARNING"
    value = logging._nameToLevel.get(name, logging.WARNING)
    return LogLevelDecision(name=name, value=value)


@dataclass(frozen=True)
class StationSettings:
    """Effective settings after CLI, environment and station.yaml are merged."""

    url: Optional[str]
    timeout: float
    temperature_unit: str
    pressure_unit: str
    timeframe: str
    visuals: str
    log_level: LogLevelDecision


def resolve_settings(
    *,
    context: StationContext | None,
    cli_url: str | None = None,
    cli_temperature: str | None = None,
    cli_pressure: str | None = None,
    cli_visuals: str | None = None,
    cli_log_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> StationSettings:
    env = os.environ if environ is None else environ
    config = context.config if context is not None else StationConfig()
    env_url = env.get(URL_ENV_VAR) or None
    return StationSettings(
        url=cascade(cli_url, env_url, config.api.url),
        timeout=config.api.timeout,
        temperature_unit=cascade(cli_temperature, config.units.temperature),
        pressure_unit=cascade(cli_pressure, config.units.pressure),
        timeframe=config.timeframe,
        visuals=cascade(
            _normalize_lower(cli_visuals),
            _normalize_lower(config.visuals),
            fallback="auto",
        ),
        log_level=resolve_log_level(cli_log_level, config.log_level),
    )
