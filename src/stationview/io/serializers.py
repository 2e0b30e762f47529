import json
from typing import Any, Iterator

from stationview.domain.payload import RenderPayload


def payload_document(payload: RenderPayload) -> dict[str, Any]:
    """Plain-data view of a payload, shaped for chart libraries."""
    return {
        "sample_count": payload.sample_count,
        "units": {
            "temperature": payload.temperature_unit,
            "pressure": payload.pressure_unit,
        },
        "series": [
            {
                "metric": entry.metric,
                "name": entry.label,
                "latest": entry.latest,
                "latest_text": entry.latest_text,
                "data": [{"x": p.x, "y": p.y} for p in entry.points],
            }
            for entry in payload.series
        ],
    }


class JsonSerializer:
    def __call__(self, payload: RenderPayload) -> Iterator[str]:
        yield json.dumps(payload_document(payload), ensure_ascii=False) + "\n"


class JsonLineSerializer:
    """One line per plot point."""

    def __call__(self, payload: RenderPayload) -> Iterator[str]:
        for entry in payload.series:
            for point in entry.points:
                yield json.dumps(
                    {"metric": entry.metric, "x": point.x, "y": point.y},
                    ensure_ascii=False,
                ) + "\n"


class PrintSerializer:
    """Summary lines, as the station's value badges show them."""

    def __call__(self, payload: RenderPayload) -> Iterator[str]:
        for entry in payload.series:
            yield f"{entry.label}: {entry.latest_text} ({len(entry)} points)\n"


SERIALIZERS = {
    "json": JsonSerializer,
    "json-lines": JsonLineSerializer,
    "print": PrintSerializer,
}


def serializer_for(fmt: str):
    try:
        return SERIALIZERS[fmt]()
    except KeyError:
        available = ", ".join(SERIALIZERS)
        raise ValueError(f"Unsupported output format {fmt!r}. Available: {available}") from None
