from __future__ import annotations

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal

from stationview.domain.units import PRESSURE, TEMPERATURE, UnitRegistry

# decimal places used when a metric value is shown to the user
DISPLAY_PLACES: dict[str, int] = {
    "humidity": 2,
    "luminosity": 2,
    "temperature": 2,
    "pressure": 3,
}


def round_half_ceiling(value: float, places: int) -> Decimal:
    """Round ties toward positive infinity, so -0.125 becomes -0.12."""
    quantum = Decimal(1).scaleb(-places)
    number = Decimal(repr(float(value)))
    rounding = ROUND_HALF_UP if number >= 0 else ROUND_HALF_DOWN
    return number.quantize(quantum, rounding=rounding)


def format_number(value: float, places: int) -> str:
    """Round ties upward to ``places`` decimals and drop trailing zeros."""
    text = format(round_half_ceiling(value, places), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_metric(
    metric: str,
    value: float,
    *,
    registry: UnitRegistry,
    temperature_unit: str,
    pressure_unit: str,
) -> str:
    try:
        places = DISPLAY_PLACES[metric]
    except KeyError:
        raise ValueError(f"unknown metric: {metric!r}") from None
    number = format_number(value, places)
    if metric == TEMPERATURE:
        return f"{number} {registry.symbol(TEMPERATURE, temperature_unit)}"
    if metric == PRESSURE:
        return f"{number} {registry.symbol(PRESSURE, pressure_unit)}"
    return f"{number}%"
