"""Map Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class MapMarker(BaseModel):
    """One environmental record projected onto the map."""

    id: str
    lat: float
    lng: float
    category: str
    severity: str
    color: str
    region_name: str = ""
    source: str = ""
    confidence_score: float = 0.0
    recorded_at: datetime | str | None = None


class LayerOption(BaseModel):
    id: str
    label: str


class MapLayerResponse(BaseModel):
    """Visible markers for the requested layers."""

    active_layers: list[str]
    markers: list[MapMarker]
    skipped: int = 0
