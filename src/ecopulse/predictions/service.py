"""Prediction listing and display lookups."""

from __future__ import annotations

import structlog

from ecopulse.geo.geometry import LocationParseError, parse_location
from ecopulse.predictions.schemas import PredictionView
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import PREDICTIONS

logger = structlog.get_logger()

IMPACT_STYLES: dict[str, str] = {
    "critical": "from-red-500/20 to-red-600/20 border-red-500/30 text-red-400",
    "high": "from-orange-500/20 to-orange-600/20 border-orange-500/30 text-orange-400",
    "medium": "from-yellow-500/20 to-yellow-600/20 border-yellow-500/30 text-yellow-400",
    "low": "from-green-500/20 to-green-600/20 border-green-500/30 text-green-400",
}

# First matching substring wins.
TYPE_ICONS: list[tuple[str, str]] = [
    ("drought", "droplets"),
    ("flood", "cloud"),
    ("pollution", "wind"),
    ("wildfire", "flame"),
]
DEFAULT_TYPE_ICON = "alert-triangle"


def impact_style_for(level: object) -> str:
    if isinstance(level, str) and level in IMPACT_STYLES:
        return IMPACT_STYLES[level]
    return IMPACT_STYLES["low"]


def icon_for_prediction(prediction_type: object) -> str:
    if not isinstance(prediction_type, str):
        return DEFAULT_TYPE_ICON
    for needle, icon in TYPE_ICONS:
        if needle in prediction_type:
            return icon
    return DEFAULT_TYPE_ICON


def to_view(row: Row) -> PredictionView:
    try:
        lat, lng = parse_location(row.get("location"))
    except LocationParseError:
        lat = lng = None

    return PredictionView(
        id=str(row["id"]),
        prediction_type=row.get("prediction_type") or "",
        region_name=row.get("region_name") or "",
        lat=lat,
        lng=lng,
        probability=row.get("probability") or 0.0,
        predicted_date=row.get("predicted_date"),
        impact_level=row.get("impact_level") or "",
        impact_style=impact_style_for(row.get("impact_level")),
        icon=icon_for_prediction(row.get("prediction_type")),
        model_used=row.get("model_used") or "",
        confidence_score=row.get("confidence_score") or 0.0,
        recommendations=row.get("recommendations") or {},
        created_at=row.get("created_at"),
    )


async def list_predictions(store: RecordStore) -> list[PredictionView]:
    """All predictions, newest first. A failed read yields an empty list."""
    try:
        rows = await store.select(PREDICTIONS, order_by="created_at", ascending=False)
    except StoreError:
        logger.warning("prediction_fetch_failed", exc_info=True)
        return []
    return [to_view(row) for row in rows]
