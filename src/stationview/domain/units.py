from __future__ import annotations

from typing import Iterator, Mapping

from stationview.errors import UnknownUnitError

TEMPERATURE = "temperature"
PRESSURE = "pressure"

DEFAULT_SYMBOLS: dict[str, dict[str, str]] = {
    TEMPERATURE: {
        "Kelvin": "K",
        "Celsius": "℃",
        "Fahrenheit": "℉",
    },
    PRESSURE: {
        "Atmosphere": "atm",
        "Millibar": "mbar",
        "Bar": "bar",
        "PSI": "PSI",
        "Mercury": "Hg",
    },
}


class UnitRegistry:
    """Lookup of display symbols keyed by ``(measurement kind, unit name)``."""

    def __init__(self, symbols: Mapping[str, Mapping[str, str]] | None = None) -> None:
        source = DEFAULT_SYMBOLS if symbols is None else symbols
        self._symbols: dict[str, dict[str, str]] = {
            kind: dict(units) for kind, units in source.items()
        }

    def units(self, kind: str) -> tuple[str, ...]:
        try:
            return tuple(self._symbols[kind])
        except KeyError:
            raise UnknownUnitError(f"unknown measurement kind: {kind!r}") from None

    def symbol(self, kind: str, unit: str) -> str:
        units = self._symbols.get(kind)
        if units is None:
            raise UnknownUnitError(f"unknown measurement kind: {kind!r}")
        try:
            return units[unit]
        except KeyError:
            available = ", ".join(units)
            raise UnknownUnitError(
                f"unknown {kind} unit {unit!r}. Available: {available}"
            ) from None

    def validate(self, kind: str, unit: str) -> str:
        self.symbol(kind, unit)
        return unit

    def __iter__(self) -> Iterator[tuple[str, str, str]]:
        for kind, units in self._symbols.items():
            for unit, symbol in units.items():
                yield kind, unit, symbol


DEFAULT_REGISTRY = UnitRegistry()
