from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Sequence

from stationview.domain.record import WeatherRecord
from stationview.sources.remote import SeriesSource

START = datetime(2020, 1, 1, tzinfo=timezone.utc)
STEP = timedelta(minutes=10)


def make_record(index: int, *, start: datetime = START) -> WeatherRecord:
    return WeatherRecord(
        time=start + index * STEP,
        humidity=40.0 + index % 10,
        luminosity=float(index),
        temperature=20.0 + index / 100,
        pressure=1000.0 + index / 1000,
    )


def make_records(count: int, *, start: datetime = START) -> list[WeatherRecord]:
    return [make_record(i, start=start) for i in range(count)]


def record_row(index: int, *, start: datetime = START) -> dict:
    """Raw row as the station API returns it."""
    record = make_record(index, start=start)
    return {
        "time": record.time.isoformat().replace("+00:00", "Z"),
        "humidity": record.humidity,
        "lux": record.luminosity,
        "temperature": record.temperature,
        "pressure": record.pressure,
    }


class StubSource(SeriesSource):
    """Returns queued results in order; an exception in the queue is raised."""

    def __init__(self, *results: Sequence[WeatherRecord] | BaseException) -> None:
        self._results = list(results)
        self.calls: list[tuple[str, str]] = []

    def fetch(self, temperature_unit: str, pressure_unit: str) -> list[WeatherRecord]:
        self.calls.append((temperature_unit, pressure_unit))
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, BaseException):
            raise result
        return list(result)


class BlockingSource(SeriesSource):
    """Holds ``fetch`` until ``release`` is called from the test."""

    def __init__(self, records: Sequence[WeatherRecord]) -> None:
        self.records = list(records)
        self.started = threading.Event()
        self._gate = threading.Event()

    def release(self) -> None:
        self._gate.set()

    def fetch(self, temperature_unit: str, pressure_unit: str) -> list[WeatherRecord]:
        self.started.set()
        if not self._gate.wait(timeout=5):
            raise TimeoutError("blocking source was never released")
        return list(self.records)


class GatedSource(SeriesSource):
    """One gate per temperature unit, so overlapping fetches finish in test order."""

    def __init__(self, results: dict[str, Sequence[WeatherRecord]]) -> None:
        self.results = {unit: list(records) for unit, records in results.items()}
        self.started = {unit: threading.Event() for unit in results}
        self._gates = {unit: threading.Event() for unit in results}

    def release(self, temperature_unit: str) -> None:
        self._gates[temperature_unit].set()

    def fetch(self, temperature_unit: str, pressure_unit: str) -> list[WeatherRecord]:
        self.started[temperature_unit].set()
        if not self._gates[temperature_unit].wait(timeout=5):
            raise TimeoutError(f"{temperature_unit} fetch was never released")
        return list(self.results[temperature_unit])
