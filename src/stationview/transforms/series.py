from __future__ import annotations

from typing import Sequence

from stationview.domain.payload import MetricSeries, PlotPoint, RenderPayload
from stationview.domain.record import METRIC_LABELS, METRICS, WeatherRecord
from stationview.domain.units import DEFAULT_REGISTRY, UnitRegistry
from stationview.errors import EmptySliceError
from stationview.transforms.formatting import format_metric


class SeriesTransformer:
    """Project a windowed slice of records into per-metric plot data.

    Stored values are never converted; the unit registry is only consulted
    when a value is rendered as text.
    """

    def __init__(self, registry: UnitRegistry | None = None) -> None:
        self.registry = registry or DEFAULT_REGISTRY

    def project(self, records: Sequence[WeatherRecord]) -> dict[str, tuple[PlotPoint, ...]]:
        return {
            metric: tuple(
                PlotPoint(x=record.timestamp, y=record.value(metric))
                for record in records
            )
            for metric in METRICS
        }

    def latest(self, records: Sequence[WeatherRecord], metric: str) -> float:
        if metric not in METRICS:
            raise ValueError(f"unknown metric: {metric!r}")
        if not records:
            raise EmptySliceError(f"no records to take the latest {metric} from")
        return records[-1].value(metric)

    def format_value(
        self,
        metric: str,
        value: float,
        temperature_unit: str,
        pressure_unit: str,
    ) -> str:
        return format_metric(
            metric,
            value,
            registry=self.registry,
            temperature_unit=temperature_unit,
            pressure_unit=pressure_unit,
        )

    def build_payload(
        self,
        records: Sequence[WeatherRecord],
        sample_count: int,
        temperature_unit: str,
        pressure_unit: str,
    ) -> RenderPayload:
        projected = self.project(records)
        series = []
        for metric in METRICS:
            latest = self.latest(records, metric)
            series.append(
                MetricSeries(
                    metric=metric,
                    label=METRIC_LABELS[metric],
                    points=projected[metric],
                    latest=latest,
                    latest_text=self.format_value(
                        metric, latest, temperature_unit, pressure_unit
                    ),
                )
            )
        return RenderPayload(
            series=tuple(series),
            sample_count=sample_count,
            temperature_unit=temperature_unit,
            pressure_unit=pressure_unit,
        )
