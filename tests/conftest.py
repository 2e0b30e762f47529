from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from tests.unit.helpers import record_row


@pytest.fixture
def response_file(tmp_path: Path):
    """Return a helper that saves ``count`` API rows as a JSON response body."""

    def _write(count: int, name: str = "usage.json") -> Path:
        path = tmp_path / name
        rows = [record_row(i) for i in range(count)]
        path.write_text(json.dumps(rows), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def station_yaml(tmp_path: Path):
    """Return a helper that writes station.yaml into tmp_path."""

    def _write(content: str) -> Path:
        path = tmp_path / "station.yaml"
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
