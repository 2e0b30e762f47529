from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

METRICS: tuple[str, ...] = ("humidity", "luminosity", "temperature", "pressure")

METRIC_LABELS: dict[str, str] = {
    "humidity": "Humidity",
    "luminosity": "Lux",
    "temperature": "Temperature",
    "pressure": "Pressure",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


@dataclass(frozen=True)
class WeatherRecord:
    """One station sample taken at ``time``.

    Temperature and pressure are expressed in whatever units the data was
    requested with; the record itself carries no unit information.
    """

    time: datetime
    humidity: float
    luminosity: float
    temperature: float
    pressure: float

    def __post_init__(self) -> None:
        if self.time.tzinfo is None:
            raise ValueError("time must be timezone-aware")
        object.__setattr__(self, "time", self.time.astimezone(timezone.utc))

    @property
    def timestamp(self) -> int:
        """Epoch milliseconds, the x coordinate used for plotting."""
        return epoch_millis(self.time)

    def value(self, metric: str) -> float:
        if metric not in METRICS:
            raise ValueError(f"unknown metric: {metric!r}")
        return getattr(self, metric)
