"""Prediction Pydantic schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel


class PredictionView(BaseModel):
    id: str
    prediction_type: str
    region_name: str = ""
    lat: float | None = None
    lng: float | None = None
    probability: float
    predicted_date: date | str | None = None
    impact_level: str
    impact_style: str
    icon: str
    model_used: str = ""
    confidence_score: float = 0.0
    recommendations: dict[str, Any] = {}
    created_at: datetime | str | None = None
