"""Location payload parsing.

Locations arrive as GeoJSON Points, either as objects or JSON-encoded
strings (``{"type": "Point", "coordinates": [lng, lat]}``). Plain
``{"lat": .., "lng": ..}`` mappings written by older clients are accepted too.
"""

from __future__ import annotations

import json
import math
from typing import Any


class LocationParseError(ValueError):
    """The location payload is not a usable point."""


def point(lat: float, lng: float) -> dict[str, Any]:
    """Build the GeoJSON Point stored in location fields. Note the [lng, lat] order."""
    return {"type": "Point", "coordinates": [lng, lat]}


def _coerce(value: Any, name: str) -> float:  # noqa: ANN401
    if isinstance(value, bool):
        raise LocationParseError(f"{name} is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise LocationParseError(f"{name} is not a number: {value!r}") from exc
    if not math.isfinite(number):
        raise LocationParseError(f"{name} is not finite: {value!r}")
    return number


def validate_coordinates(lat: float, lng: float) -> tuple[float, float]:
    """Range-check a (lat, lng) pair and return it as floats."""
    lat = _coerce(lat, "latitude")
    lng = _coerce(lng, "longitude")
    if not -90.0 <= lat <= 90.0:
        raise LocationParseError(f"latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise LocationParseError(f"longitude out of range: {lng}")
    return lat, lng


def parse_location(raw: Any) -> tuple[float, float]:  # noqa: ANN401
    """Return ``(lat, lng)`` from a stored location payload.

    Raises LocationParseError for anything that is not a valid point.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise LocationParseError(f"location is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise LocationParseError(f"unsupported location payload: {type(raw).__name__}")

    if "coordinates" in raw:
        if raw.get("type", "Point") != "Point":
            raise LocationParseError(f"unsupported geometry type: {raw.get('type')!r}")
        coordinates = raw["coordinates"]
        if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
            raise LocationParseError(f"malformed coordinates: {coordinates!r}")
        return validate_coordinates(coordinates[1], coordinates[0])

    if "lat" in raw and "lng" in raw:
        return validate_coordinates(raw["lat"], raw["lng"])

    raise LocationParseError("location has neither coordinates nor lat/lng")
