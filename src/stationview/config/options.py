"""Shared CLI/config option sets.

Keep these centralized so CLI parser choices and config validation stay in
sync.
"""

from stationview.domain.units import DEFAULT_REGISTRY, PRESSURE, TEMPERATURE
from stationview.window.resolver import PRESET_NAMES

TEMPERATURE_UNITS = DEFAULT_REGISTRY.units(TEMPERATURE)
PRESSURE_UNITS = DEFAULT_REGISTRY.units(PRESSURE)
TIMEFRAMES = PRESET_NAMES

OUTPUT_FORMATS = ("table", "print", "json", "json-lines")
VISUAL_CHOICES = ("auto", "rich", "off")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_TEMPERATURE_UNIT = "Celsius"
DEFAULT_PRESSURE_UNIT = "Millibar"

CONFIG_FILENAME = "station.yaml"
URL_ENV_VAR = "STATIONVIEW_URL"
