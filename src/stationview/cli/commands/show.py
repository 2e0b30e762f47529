from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console

from stationview.cli.visuals import fetch_status, print_summary
from stationview.config.options import URL_ENV_VAR
from stationview.config.resolution import StationSettings
from stationview.errors import StationViewError, WindowInputError
from stationview.io.output import resolve_output_target, write_payload
from stationview.presentation.controller import PresentationController
from stationview.sources.remote import FileSeriesSource, RemoteSeriesSource, SeriesSource
from stationview.window.resolver import WindowResolver, parse_window

logger = logging.getLogger(__name__)


def _build_source(settings: StationSettings, file: Optional[str]) -> SeriesSource:
    if file:
        return FileSeriesSource(file)
    if not settings.url:
        print(
            f"no API url configured; pass --url, set {URL_ENV_VAR}, or add api.url to station.yaml",
            file=sys.stderr,
        )
        raise SystemExit(2)
    return RemoteSeriesSource(settings.url, timeout=settings.timeout)


def handle(
    *,
    settings: StationSettings,
    file: Optional[str] = None,
    window: Optional[str] = None,
    fmt: str = "table",
    out: Optional[str] = None,
    rich_enabled: bool = False,
    stdout: Optional[TextIO] = None,
    status_console: Optional[Console] = None,
) -> int:
    if fmt == "table" and out is not None:
        print("table output can only go to stdout; pick json, json-lines or print", file=sys.stderr)
        raise SystemExit(2)

    source = _build_source(settings, file)
    controller = PresentationController(
        source,
        temperature_unit=settings.temperature_unit,
        pressure_unit=settings.pressure_unit,
        resolver=WindowResolver(default_preset=settings.timeframe),
    )

    try:
        with fetch_status(status_console or Console(file=sys.stderr), "Fetching station data", rich_enabled):
            payload = asyncio.run(controller.reload())
        if window is not None:
            payload = controller.set_window(parse_window(window)) or payload
    except WindowInputError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except StationViewError as exc:
        logger.debug("show failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out_stream = stdout or sys.stdout
    if fmt == "table":
        print_summary(payload, Console(file=out_stream))
        return 0
    write_payload(payload, resolve_output_target(fmt, out, Path.cwd()), stream=out_stream)
    return 0
