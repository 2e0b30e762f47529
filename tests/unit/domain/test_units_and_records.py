from datetime import datetime, timedelta, timezone

import pytest

from stationview.domain.record import WeatherRecord, epoch_millis
from stationview.domain.units import DEFAULT_REGISTRY, UnitRegistry
from stationview.errors import UnknownUnitError


def test_default_registry_symbols():
    assert DEFAULT_REGISTRY.symbol("temperature", "Celsius") == "℃"
    assert DEFAULT_REGISTRY.symbol("temperature", "Fahrenheit") == "℉"
    assert DEFAULT_REGISTRY.symbol("temperature", "Kelvin") == "K"
    assert DEFAULT_REGISTRY.symbol("pressure", "Millibar") == "mbar"
    assert DEFAULT_REGISTRY.symbol("pressure", "Mercury") == "Hg"


def test_registry_rejects_unknown_unit_and_kind():
    with pytest.raises(UnknownUnitError):
        DEFAULT_REGISTRY.symbol("temperature", "Rankine")
    with pytest.raises(UnknownUnitError):
        DEFAULT_REGISTRY.symbol("wind", "Knots")


def test_custom_registry_is_independent_of_input_mapping():
    symbols = {"temperature": {"Celsius": "C"}}
    registry = UnitRegistry(symbols)
    symbols["temperature"]["Celsius"] = "changed"
    assert registry.symbol("temperature", "Celsius") == "C"
    assert list(registry) == [("temperature", "Celsius", "C")]


def test_record_normalizes_time_to_utc():
    local = timezone(timedelta(hours=2))
    record = WeatherRecord(
        time=datetime(2020, 1, 1, 12, tzinfo=local),
        humidity=1.0,
        luminosity=2.0,
        temperature=3.0,
        pressure=4.0,
    )
    assert record.time == datetime(2020, 1, 1, 10, tzinfo=timezone.utc)
    assert record.time.tzinfo == timezone.utc
    assert record.timestamp == epoch_millis(record.time) == 1577872800000


def test_record_requires_aware_time_and_is_frozen():
    with pytest.raises(ValueError):
        WeatherRecord(time=datetime(2020, 1, 1), humidity=0, luminosity=0, temperature=0, pressure=0)
    record = WeatherRecord(
        time=datetime(2020, 1, 1, tzinfo=timezone.utc),
        humidity=0, luminosity=0, temperature=0, pressure=0,
    )
    with pytest.raises(AttributeError):
        record.humidity = 5  # type: ignore[misc]
