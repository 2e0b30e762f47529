from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, TextIO

from stationview.domain.payload import RenderPayload
from stationview.io.serializers import serializer_for


@dataclass(frozen=True)
class OutputTarget:
    """Resolved writer target describing how and where to emit a payload."""

    format: str  # print | json | json-lines
    destination: Optional[Path] = None

    @property
    def transport(self) -> str:
        return "stdout" if self.destination is None else "fs"


def resolve_output_target(fmt: str, out_path: str | None, base_path: Path | None = None) -> OutputTarget:
    if out_path is None:
        return OutputTarget(format=fmt)
    candidate = Path(out_path)
    if not candidate.is_absolute():
        candidate = (base_path or Path.cwd()) / candidate
    return OutputTarget(format=fmt, destination=candidate.resolve())


def _write_atomic(dest: Path, lines: Iterable[str]) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line)
        os.replace(tmp_name, dest)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def write_payload(payload: RenderPayload, target: OutputTarget, stream: TextIO | None = None) -> None:
    lines = serializer_for(target.format)(payload)
    if target.destination is None:
        out = stream or sys.stdout
        for line in lines:
            out.write(line)
        out.flush()
        return
    _write_atomic(target.destination, lines)
