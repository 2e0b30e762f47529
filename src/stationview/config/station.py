from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from stationview.config.options import (
    CONFIG_FILENAME,
    DEFAULT_PRESSURE_UNIT,
    DEFAULT_TEMPERATURE_UNIT,
    LOG_LEVELS,
    PRESSURE_UNITS,
    TEMPERATURE_UNITS,
    TIMEFRAMES,
    VISUAL_CHOICES,
)
from stationview.utils.load import load_yaml


def _strip(value: object):
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text if text else None
    return value


class ApiConfig(BaseModel):
    url: Optional[str] = Field(default=None, description="usage endpoint of the station API")
    timeout: float = Field(default=30.0, gt=0, description="request timeout in seconds")

    @field_validator("url", mode="before")
    @classmethod
    def _normalize_url(cls, value: object):
        return _strip(value)


class UnitsConfig(BaseModel):
    temperature: str = Field(default=DEFAULT_TEMPERATURE_UNIT, description="Kelvin | Celsius | Fahrenheit")
    pressure: str = Field(default=DEFAULT_PRESSURE_UNIT, description="Atmosphere | Millibar | Bar | PSI | Mercury")

    @field_validator("temperature", mode="before")
    @classmethod
    def _validate_temperature(cls, value):
        value = _strip(value) or DEFAULT_TEMPERATURE_UNIT
        if value not in TEMPERATURE_UNITS:
            raise ValueError(
                f"temperature must be one of {', '.join(TEMPERATURE_UNITS)}, got {value!r}"
            )
        return value

    @field_validator("pressure", mode="before")
    @classmethod
    def _validate_pressure(cls, value):
        value = _strip(value) or DEFAULT_PRESSURE_UNIT
        if value not in PRESSURE_UNITS:
            raise ValueError(
                f"pressure must be one of {', '.join(PRESSURE_UNITS)}, got {value!r}"
            )
        return value


class StationConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    units: UnitsConfig = Field(default_factory=UnitsConfig)
    timeframe: str = Field(default="QuarterYear", description="default window preset")
    log_level: Optional[str] = Field(default=None, description="DEFAULT LOG LEVEL")
    visuals: Optional[str] = Field(default=None, description="AUTO | RICH | OFF")

    @field_validator("timeframe", mode="before")
    @classmethod
    def _validate_timeframe(cls, value):
        value = _strip(value) or "QuarterYear"
        if value not in TIMEFRAMES:
            raise ValueError(
                f"timeframe must be one of {', '.join(TIMEFRAMES)}, got {value!r}"
            )
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        value = _strip(value)
        if value is None:
            return None
        name = str(value).upper()
        if name not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
            )
        return name

    @field_validator("visuals", mode="before")
    @classmethod
    def _normalize_visuals(cls, value):
        if isinstance(value, bool):
            return "off" if value is False else "auto"
        value = _strip(value)
        if value is None:
            return None
        name = str(value).lower()
        if name not in VISUAL_CHOICES:
            raise ValueError(
                f"visuals must be one of {', '.join(VISUAL_CHOICES)}, got {value!r}"
            )
        return name


@dataclass
class StationContext:
    file_path: Path
    config: StationConfig

    @property
    def root(self) -> Path:
        return self.file_path.parent


def load_station_config(path: Path) -> StationConfig:
    data = load_yaml(path)
    # null sections fall back to defaults
    for key in ("api", "units"):
        if key in data and data[key] is None:
            data.pop(key)
    return StationConfig.model_validate(data)


def load_station_context(start_dir: Optional[Path] = None) -> Optional[StationContext]:
    """Search from start_dir upward for station.yaml and return parsed config."""
    directory = (start_dir or Path.cwd()).resolve()
    for path in [directory, *directory.parents]:
        candidate = path / CONFIG_FILENAME
        if candidate.is_file():
            return StationContext(file_path=candidate, config=load_station_config(candidate))
    return None
