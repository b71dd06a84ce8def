"""Tests for GeoJSON incident and police station loading."""

import json
from datetime import datetime, timezone

import pytest

from streetwise_routing.data.data_loader import load_incidents, load_police_stations


def _write_features(tmp_path, features, name="data.geojson"):
    path = tmp_path / name
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}), encoding="utf-8")
    return str(path)


def _point(lon, lat, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


class TestLoadIncidents:

    def test_loads_valid_features(self, tmp_path):
        path = _write_features(tmp_path, [
            _point(2.35, 48.86, id="a1", type="harassment", severity=10, created_at="2026-09-30T08:15:00Z"),
            _point(2.36, 48.87, id="a2", type="animal", created_at="2026-09-29T20:00:00+00:00"),
        ])
        incidents = load_incidents(path)
        assert [i.id for i in incidents] == ["a1", "a2"]
        assert incidents[0].location == (2.35, 48.86)
        assert incidents[0].created_at == datetime(2026, 9, 30, 8, 15, tzinfo=timezone.utc)

    def test_missing_severity_derived_from_category(self, tmp_path):
        path = _write_features(tmp_path, [
            _point(2.35, 48.86, id="a1", type="suspicious", created_at="2026-09-30T08:15:00Z"),
        ])
        assert load_incidents(path)[0].severity == 7

    def test_bad_features_skipped(self, tmp_path):
        path = _write_features(tmp_path, [
            _point(2.35, 48.86, id="ok", type="harassment", created_at="2026-09-30T08:15:00Z"),
            _point(2.35, 48.86, id="no-date", type="harassment"),
            _point(2.35, 148.0, id="bad-lat", type="harassment", created_at="2026-09-30T08:15:00Z"),
            _point(2.35, 48.86, id="bad-date", type="harassment", created_at="yesterday"),
            {"type": "Feature", "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
             "properties": {"id": "line", "type": "harassment", "created_at": "2026-09-30T08:15:00Z"}},
        ])
        assert [i.id for i in load_incidents(path)] == ["ok"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_incidents(str(tmp_path / "missing.geojson"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.geojson"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            load_incidents(str(path))

    def test_not_a_feature_collection(self, tmp_path):
        path = tmp_path / "plain.json"
        path.write_text(json.dumps({"incidents": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_incidents(str(path))


class TestLoadPoliceStations:

    def test_loads_stations(self, tmp_path):
        path = _write_features(tmp_path, [
            _point(2.35, 48.86, id="p1", name="Commissariat du 4e", phone="01 23 45 67 89"),
            _point(2.36, 48.87),
        ])
        stations = load_police_stations(path)
        assert len(stations) == 2
        assert stations[0].name == "Commissariat du 4e"
        assert stations[0].phone == "01 23 45 67 89"
        assert stations[1].id == "1"

    def test_invalid_geometry_skipped(self, tmp_path):
        path = _write_features(tmp_path, [
            _point("east", 48.86, id="p1"),
            _point(2.36, 48.87, id="p2"),
        ])
        assert [s.id for s in load_police_stations(path)] == ["p2"]
