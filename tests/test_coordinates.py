from __future__ import annotations

import logging

import pytest

from services.coordinates import CoordinateNormalizer, parse_coordinate
from services.errors import MalformedCoordinateError


def _record(lat: str, lon: str, reading_id: str = "A", **fields) -> dict:
    record = {"id_ph": reading_id, "lat": lat, "lon": lon}
    record.update(fields)
    return record


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("6.123.456", 6.123456),
        ("6.5", 6.5),
        ("6", 6.0),
        ("-6.200.000", -6.2),
        ("106.800.000", 106.8),
        (" 6.5 ", 6.5),
    ],
)
def test_parse_coordinate_treats_later_dots_as_group_separators(text: str, expected: float) -> None:
    assert parse_coordinate(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "   ", ".", "abc", "6,5", "1_0.5", "nan", "inf"])
def test_parse_coordinate_rejects_malformed_text(text: str) -> None:
    with pytest.raises(MalformedCoordinateError):
        parse_coordinate(text)


def test_parse_coordinate_rejects_non_strings() -> None:
    with pytest.raises(MalformedCoordinateError):
        parse_coordinate(None)
    with pytest.raises(MalformedCoordinateError):
        parse_coordinate(6.5)


def test_normalize_builds_point_with_longitude_first() -> None:
    collection = CoordinateNormalizer().normalize(
        [_record("6.200.000", "106.800.000", reading_id="A")]
    )

    geojson = collection.to_geojson()
    assert geojson["type"] == "FeatureCollection"
    feature = geojson["features"][0]
    assert feature["type"] == "Feature"
    assert feature["geometry"]["type"] == "Point"
    assert feature["geometry"]["coordinates"] == pytest.approx([106.8, 6.2])
    assert feature["properties"] == {"id_ph": "A"}


def test_normalize_preserves_order_length_and_properties() -> None:
    records = [
        _record("6.1", "106.1", reading_id="first", tanggal="2024-01-01T00:00:00Z", nilai_ph=7.1),
        _record("6.2", "106.2", reading_id="second", id_lokasi="L1", nilai_turbidity=3.4),
        _record("6.3", "106.3", reading_id="third", nilai_accel_x=0.01),
    ]

    collection = CoordinateNormalizer().normalize(records)

    assert len(collection) == len(records)
    ids = [feature.properties["id_ph"] for feature in collection.features]
    assert ids == ["first", "second", "third"]
    assert collection.features[0].properties["tanggal"] == "2024-01-01T00:00:00Z"
    assert collection.features[1].properties["id_lokasi"] == "L1"
    assert all("lat" not in f.properties and "lon" not in f.properties for f in collection.features)


def test_normalize_leaves_input_records_untouched() -> None:
    record = _record("6.200.000", "106.800.000")
    original = dict(record)

    CoordinateNormalizer().normalize([record])

    assert record == original


def test_normalize_empty_batch() -> None:
    collection = CoordinateNormalizer().normalize([])

    assert collection.to_geojson() == {"type": "FeatureCollection", "features": []}


def test_abort_policy_reports_record_and_field() -> None:
    records = [_record("6.1", "106.1"), _record("6.2", "")]

    with pytest.raises(MalformedCoordinateError) as excinfo:
        CoordinateNormalizer(policy="abort").normalize(records)

    assert excinfo.value.index == 1
    assert excinfo.value.field == "lon"
    assert "record 1" in str(excinfo.value)


def test_missing_coordinate_is_malformed() -> None:
    with pytest.raises(MalformedCoordinateError) as excinfo:
        CoordinateNormalizer().normalize([{"id_ph": "A", "lon": "106.8"}])

    assert excinfo.value.field == "lat"


def test_skip_policy_drops_record_and_logs(caplog) -> None:
    records = [
        _record("6.1", "106.1", reading_id="ok-1"),
        _record("not-a-number", "106.2", reading_id="bad"),
        _record("6.3", "106.3", reading_id="ok-2"),
    ]

    with caplog.at_level(logging.WARNING):
        collection = CoordinateNormalizer(policy="skip").normalize(records)

    assert [f.properties["id_ph"] for f in collection.features] == ["ok-1", "ok-2"]
    assert len(collection.issues) == 1
    issue = collection.issues[0]
    assert issue.index == 1
    assert issue.field == "lat"

    warnings = [r for r in caplog.records if r.name == "services.coordinates"]
    assert any(getattr(r, "record_index", None) == 1 for r in warnings)


def test_unknown_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        CoordinateNormalizer(policy="nan")
