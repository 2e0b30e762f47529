from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class PlotPoint:
    x: int
    y: float


@dataclass(frozen=True)
class MetricSeries:
    """Plot points for one metric plus its latest-value summary."""

    metric: str
    label: str
    points: tuple[PlotPoint, ...]
    latest: float
    latest_text: str

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class RenderPayload:
    """Everything a chart renderer and summary display need for one window.

    Attributes:
        series: One entry per metric, in humidity/luminosity/temperature/pressure order.
        sample_count: Requested window size; the series may hold fewer points
            when the history is shorter.
        temperature_unit: Unit name the temperature values are expressed in.
        pressure_unit: Unit name the pressure values are expressed in.
    """

    series: tuple[MetricSeries, ...]
    sample_count: int
    temperature_unit: str
    pressure_unit: str

    def __iter__(self) -> Iterator[MetricSeries]:
        return iter(self.series)

    def __getitem__(self, metric: str) -> MetricSeries:
        for entry in self.series:
            if entry.metric == metric:
                return entry
        raise KeyError(metric)

    def points(self, metric: str) -> tuple[PlotPoint, ...]:
        return self[metric].points

    def latest(self, metric: str) -> float:
        return self[metric].latest

    @property
    def metrics(self) -> tuple[str, ...]:
        return tuple(entry.metric for entry in self.series)
