"""Location payload parsing tests."""

import json

import pytest

from ecopulse.geo.geometry import LocationParseError, parse_location, point


class TestParseLocation:
    def test_geojson_object(self):
        assert parse_location({"type": "Point", "coordinates": [-74.006, 40.7128]}) == (40.7128, -74.006)

    def test_geojson_string(self):
        raw = json.dumps({"type": "Point", "coordinates": [2.35, 48.85]})
        assert parse_location(raw) == (48.85, 2.35)

    def test_lat_lng_mapping(self):
        assert parse_location({"lat": -3.4, "lng": -62.2}) == (-3.4, -62.2)

    def test_point_round_trips(self):
        assert parse_location(point(10.5, 20.25)) == (10.5, 20.25)

    def test_point_is_lng_lat_ordered(self):
        assert point(1.0, 2.0) == {"type": "Point", "coordinates": [2.0, 1.0]}

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "not json",
            "[1, 2]",
            42,
            {},
            {"type": "Polygon", "coordinates": [[0, 0], [1, 1]]},
            {"type": "Point", "coordinates": [1]},
            {"type": "Point", "coordinates": "1,2"},
            {"type": "Point", "coordinates": ["x", "y"]},
            {"type": "Point", "coordinates": [0, 95]},
            {"type": "Point", "coordinates": [190, 0]},
            {"lat": True, "lng": 0},
            {"lat": float("nan"), "lng": 0},
        ],
    )
    def test_malformed_payloads_raise(self, raw):
        with pytest.raises(LocationParseError):
            parse_location(raw)
