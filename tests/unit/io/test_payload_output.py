import io
import json

import pytest

from stationview.io.output import OutputTarget, resolve_output_target, write_payload
from stationview.io.serializers import payload_document, serializer_for
from stationview.transforms.series import SeriesTransformer
from tests.unit.helpers import make_records


@pytest.fixture
def payload():
    return SeriesTransformer().build_payload(make_records(3), 145, "Celsius", "Millibar")


def test_payload_document_shape(payload):
    doc = payload_document(payload)
    assert doc["sample_count"] == 145
    assert doc["units"] == {"temperature": "Celsius", "pressure": "Millibar"}
    assert [s["name"] for s in doc["series"]] == ["Humidity", "Lux", "Temperature", "Pressure"]
    lux = doc["series"][1]
    assert lux["metric"] == "luminosity"
    assert lux["data"] == [
        {"x": 1577836800000, "y": 0.0},
        {"x": 1577837400000, "y": 1.0},
        {"x": 1577838000000, "y": 2.0},
    ]
    assert lux["latest"] == 2.0
    assert lux["latest_text"] == "2%"


def test_json_lines_emit_one_line_per_point(payload):
    out = io.StringIO()
    write_payload(payload, OutputTarget(format="json-lines"), stream=out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 12
    assert json.loads(lines[0]) == {"metric": "humidity", "x": 1577836800000, "y": 40.0}


def test_print_format_lists_latest_values(payload):
    out = io.StringIO()
    write_payload(payload, OutputTarget(format="print"), stream=out)
    assert out.getvalue().splitlines() == [
        "Humidity: 42% (3 points)",
        "Lux: 2% (3 points)",
        "Temperature: 20.02 ℃ (3 points)",
        "Pressure: 1000.002 mbar (3 points)",
    ]


def test_file_output_is_written_and_resolved_relative(tmp_path, payload):
    target = resolve_output_target("json", "out/payload.json", tmp_path)
    assert target.transport == "fs"
    assert target.destination == (tmp_path / "out" / "payload.json").resolve()

    write_payload(payload, target)

    doc = json.loads(target.destination.read_text(encoding="utf-8"))
    assert doc == payload_document(payload)
    assert [p.name for p in target.destination.parent.iterdir()] == ["payload.json"]


def test_stdout_target_when_no_path():
    assert resolve_output_target("json", None).transport == "stdout"


def test_unknown_format_is_rejected():
    with pytest.raises(ValueError):
        serializer_for("xml")
