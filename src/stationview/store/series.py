from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from stationview.domain.record import WeatherRecord
from stationview.errors import EmptyResponseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesSnapshot:
    records: tuple[WeatherRecord, ...]
    temperature_unit: str
    pressure_unit: str


class SeriesStore:
    """Full fetched history plus the units it was requested in.

    Content is held as one immutable snapshot; ``load`` swaps the handle, so a
    reader never observes a half-loaded series.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[SeriesSnapshot] = None

    def load(
        self,
        records: Iterable[WeatherRecord],
        temperature_unit: str,
        pressure_unit: str,
    ) -> None:
        materialized = tuple(records)
        if not materialized:
            raise EmptyResponseError("remote source returned no records")
        self._snapshot = SeriesSnapshot(
            records=materialized,
            temperature_unit=temperature_unit,
            pressure_unit=pressure_unit,
        )
        logger.info(
            "loaded %d records (temperature=%s, pressure=%s)",
            len(materialized),
            temperature_unit,
            pressure_unit,
        )

    def snapshot(self) -> Optional[SeriesSnapshot]:
        return self._snapshot

    @property
    def is_empty(self) -> bool:
        return self._snapshot is None

    @property
    def temperature_unit(self) -> Optional[str]:
        return self._snapshot.temperature_unit if self._snapshot else None

    @property
    def pressure_unit(self) -> Optional[str]:
        return self._snapshot.pressure_unit if self._snapshot else None

    def size(self) -> int:
        return len(self._snapshot.records) if self._snapshot else 0

    def slice(self, sample_count: int) -> tuple[WeatherRecord, ...]:
        """Return the most recent ``min(sample_count, size())`` records.

        Requests larger than the history are clamped silently.
        """
        snapshot = self._snapshot
        if snapshot is None or sample_count <= 0:
            return ()
        records = snapshot.records
        if sample_count >= len(records):
            return records
        logger.debug("slicing %d of %d records", sample_count, len(records))
        return records[len(records) - sample_count:]
