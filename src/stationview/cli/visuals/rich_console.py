from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from stationview.domain.payload import RenderPayload


def use_rich(visuals: str, console: Optional[Console] = None) -> bool:
    """AUTO renders only on a terminal; RICH forces it; OFF disables it."""
    if visuals == "off":
        return False
    if visuals == "rich":
        return True
    return (console or Console(file=sys.stderr)).is_terminal


def stderr_console() -> Console:
    return Console(file=sys.stderr, markup=False, highlight=False, soft_wrap=True)


def install_rich_logging(console: Console, level: int) -> RichHandler:
    """Swap root handlers for a RichHandler bound to ``console``."""
    handler = RichHandler(
        console=console,
        show_time=False,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
    return handler


@contextmanager
def fetch_status(console: Console, message: str, enabled: bool) -> Iterator[None]:
    if not enabled:
        yield
        return
    with console.status(message, spinner="dots"):
        yield


def summary_table(payload: RenderPayload) -> Table:
    table = Table(title=f"Latest values ({payload.sample_count} sample window)")
    table.add_column("Metric")
    table.add_column("Latest", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Last sample (UTC)")
    for entry in payload.series:
        last = entry.points[-1].x if entry.points else None
        table.add_row(entry.label, entry.latest_text, str(len(entry)), _format_x(last))
    return table


def _format_x(value: Optional[int]) -> str:
    if value is None:
        return "-"
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def print_summary(payload: RenderPayload, console: Optional[Console] = None) -> None:
    (console or Console()).print(summary_table(payload))
