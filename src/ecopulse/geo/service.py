"""Map layer assembly: fetch, project onto points, filter by layer."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from ecopulse.geo.geometry import LocationParseError, parse_location
from ecopulse.geo.layers import LayerSelection, color_for, filter_visible
from ecopulse.geo.schemas import MapLayerResponse, MapMarker
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import ENVIRONMENTAL_DATA

logger = structlog.get_logger()


def project_records(rows: Iterable[Row]) -> tuple[list[MapMarker], int]:
    """Turn environmental rows into markers.

    Rows whose location cannot be parsed are logged and skipped.
    Returns the markers and the number of skipped rows.
    """
    markers: list[MapMarker] = []
    skipped = 0
    for row in rows:
        try:
            lat, lng = parse_location(row.get("location"))
        except LocationParseError as exc:
            skipped += 1
            logger.warning("location_parse_failed", record_id=row.get("id"), error=str(exc))
            continue

        severity = row.get("severity_level") or ""
        markers.append(
            MapMarker(
                id=str(row.get("id")),
                lat=lat,
                lng=lng,
                category=row.get("data_type") or "",
                severity=severity,
                color=color_for(severity),
                region_name=row.get("region_name") or "",
                source=row.get("source") or "",
                confidence_score=row.get("confidence_score") or 0.0,
                recorded_at=row.get("recorded_at"),
            )
        )
    return markers, skipped


async def fetch_recent_environmental_data(store: RecordStore, limit: int) -> list[Row]:
    """Most recent ``limit`` environmental records; empty on store failure."""
    try:
        return await store.select(
            ENVIRONMENTAL_DATA,
            order_by="recorded_at",
            ascending=False,
            limit=limit,
        )
    except StoreError:
        logger.warning("environmental_data_fetch_failed", exc_info=True)
        return []


async def load_map_layer(
    store: RecordStore,
    active: Iterable[str] | None = None,
    limit: int = 100,
) -> MapLayerResponse:
    """Markers visible under the active layer keys (``{"all"}`` by default)."""
    selection = LayerSelection(active)
    rows = await fetch_recent_environmental_data(store, limit)
    markers, skipped = project_records(rows)
    visible = filter_visible(markers, selection.active)
    return MapLayerResponse(
        active_layers=sorted(selection.active),
        markers=visible,
        skipped=skipped,
    )
