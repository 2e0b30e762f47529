import logging

import pytest
from pydantic import ValidationError

from stationview.config.resolution import cascade, resolve_log_level, resolve_settings
from stationview.config.station import load_station_context


def test_missing_station_yaml_yields_none(tmp_path):
    assert load_station_context(tmp_path) is None


def test_station_yaml_is_found_from_nested_directory(tmp_path, station_yaml):
    station_yaml(
        """
        api:
          url: https://station.example/api/v1/usage
          timeout: 12
        units:
          temperature: Kelvin
          pressure: Bar
        timeframe: Week
        log_level: debug
        visuals: off
        """
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    context = load_station_context(nested)

    assert context is not None
    assert context.root == tmp_path.resolve()
    cfg = context.config
    assert cfg.api.url == "https://station.example/api/v1/usage"
    assert cfg.api.timeout == 12
    assert cfg.units.temperature == "Kelvin"
    assert cfg.units.pressure == "Bar"
    assert cfg.timeframe == "Week"
    assert cfg.log_level == "DEBUG"
    assert cfg.visuals == "off"


def test_null_sections_fall_back_to_defaults(tmp_path, station_yaml):
    station_yaml(
        """
        api:
        units:
        """
    )
    cfg = load_station_context(tmp_path).config
    assert cfg.api.url is None
    assert cfg.units.temperature == "Celsius"
    assert cfg.units.pressure == "Millibar"
    assert cfg.timeframe == "QuarterYear"


@pytest.mark.parametrize(
    "content",
    [
        "units:\n  temperature: Rankine\n",
        "units:\n  pressure: Torr\n",
        "timeframe: Fortnight\n",
        "log_level: LOUD\n",
        "visuals: sparkles\n",
        "api:\n  timeout: 0\n",
    ],
)
def test_invalid_settings_are_rejected(tmp_path, station_yaml, content):
    station_yaml(content)
    with pytest.raises(ValidationError):
        load_station_context(tmp_path)


def test_non_mapping_yaml_is_rejected(tmp_path, station_yaml):
    station_yaml("- just\n- a list\n")
    with pytest.raises(TypeError):
        load_station_context(tmp_path)


def test_cascade_returns_first_non_none():
    assert cascade(None, "cli", "config") == "cli"
    assert cascade(None, None, fallback="x") == "x"


def test_resolve_log_level_prefers_first_value():
    decision = resolve_log_level(None, "info")
    assert decision.name == "INFO"
    assert decision.value == logging.INFO
    assert resolve_log_level(None, None).value == logging.WARNING
    assert resolve_log_level(logging.DEBUG).name == "DEBUG"


def test_resolve_settings_precedence(tmp_path, station_yaml):
    station_yaml(
        """
        api:
          url: https://from-config.example/usage
        units:
          temperature: Kelvin
        visuals: rich
        log_level: INFO
        """
    )
    context = load_station_context(tmp_path)

    from_config = resolve_settings(context=context, environ={})
    assert from_config.url == "https://from-config.example/usage"
    assert from_config.temperature_unit == "Kelvin"
    assert from_config.pressure_unit == "Millibar"
    assert from_config.visuals == "rich"
    assert from_config.log_level.name == "INFO"

    env = {"STATIONVIEW_URL": "https://from-env.example/usage"}
    from_env = resolve_settings(context=context, environ=env)
    assert from_env.url == "https://from-env.example/usage"

    from_cli = resolve_settings(
        context=context,
        environ=env,
        cli_url="https://from-cli.example/usage",
        cli_temperature="Fahrenheit",
        cli_visuals="OFF",
        cli_log_level="ERROR",
    )
    assert from_cli.url == "https://from-cli.example/usage"
    assert from_cli.temperature_unit == "Fahrenheit"
    assert from_cli.visuals == "off"
    assert from_cli.log_level.value == logging.ERROR


def test_resolve_settings_without_config_uses_defaults():
    settings = resolve_settings(context=None, environ={})
    assert settings.url is None
    assert settings.timeframe == "QuarterYear"
    assert settings.visuals == "auto"
    assert settings.log_level.name == "WARNING"
