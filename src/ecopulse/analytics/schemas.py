"""Analytics Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel


class TrendBucket(BaseModel):
    """One calendar day of activity."""

    date: str
    label: str
    total_count: int
    critical_count: int


class AnalyticsSummaryResponse(BaseModel):
    """Totals, histograms and the 7-day trend shown on the analytics view."""

    total_records: int
    total_reports: int
    total_predictions: int
    critical_alerts: int
    severity_counts: dict[str, int]
    category_counts: dict[str, int]
    trend: list[TrendBucket]
