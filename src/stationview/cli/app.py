import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from stationview.cli.commands.show import handle as handle_show
from stationview.cli.commands.units import handle as handle_units
from stationview.cli.visuals import install_rich_logging, stderr_console, use_rich
from stationview.config.options import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    PRESSURE_UNITS,
    TEMPERATURE_UNITS,
    VISUAL_CHOICES,
)
from stationview.config.resolution import resolve_settings
from stationview.config.station import load_station_context


def build_parser() -> argparse.ArgumentParser:
    # Common options shared by top-level and subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        type=str.upper,
        help="set logging level (default: WARNING)",
    )

    parser = argparse.ArgumentParser(
        prog="stationview",
        description="Window and summarize weather station history.",
        parents=[common],
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser(
        "show",
        help="fetch the station history and show one window of it",
        parents=[common],
    )
    src = p_show.add_mutually_exclusive_group()
    src.add_argument("--url", help="usage endpoint of the station API")
    src.add_argument("--file", help="read a saved JSON response instead of fetching")
    p_show.add_argument(
        "--temperature",
        choices=list(TEMPERATURE_UNITS),
        default=None,
        help="temperature unit to request (default from station.yaml, else Celsius)",
    )
    p_show.add_argument(
        "--pressure",
        choices=list(PRESSURE_UNITS),
        default=None,
        help="pressure unit to request (default from station.yaml, else Millibar)",
    )
    p_show.add_argument(
        "--window",
        "-w",
        default=None,
        help="QuarterYear, Month, Week, Day, or a number of hours (0 < h < 2160)",
    )
    p_show.add_argument(
        "--format",
        "-f",
        dest="fmt",
        choices=list(OUTPUT_FORMATS),
        default="table",
        help="output format (default: table)",
    )
    p_show.add_argument(
        "--out",
        "-o",
        default=None,
        help="write the output to this file instead of stdout",
    )
    p_show.add_argument(
        "--visuals",
        choices=list(VISUAL_CHOICES),
        default=None,
        help="status/log renderer: auto (default), rich, or off",
    )

    sub.add_parser(
        "units",
        help="list the known measurement units and their symbols",
        parents=[common],
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        context = load_station_context(Path.cwd())
    except (ValueError, TypeError) as exc:
        parser.error(f"invalid station.yaml: {exc}")
    settings = resolve_settings(
        context=context,
        cli_url=getattr(args, "url", None),
        cli_temperature=getattr(args, "temperature", None),
        cli_pressure=getattr(args, "pressure", None),
        cli_visuals=getattr(args, "visuals", None),
        cli_log_level=getattr(args, "log_level", None),
    )

    logging.basicConfig(level=settings.log_level.value, format="%(message)s")
    console = stderr_console()
    rich_enabled = use_rich(settings.visuals, console)
    if rich_enabled:
        install_rich_logging(console, settings.log_level.value)

    if args.cmd == "units":
        return handle_units()

    return handle_show(
        settings=settings,
        file=getattr(args, "file", None),
        window=getattr(args, "window", None),
        fmt=args.fmt,
        out=getattr(args, "out", None),
        rich_enabled=rich_enabled,
        status_console=console,
    )


if __name__ == "__main__":
    raise SystemExit(main())
