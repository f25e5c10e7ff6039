"""Analytics aggregation over the record store.

Only the most recent N environmental records are sampled, so activity
older than that window never reaches the histograms or the trend.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from ecopulse.analytics.schemas import AnalyticsSummaryResponse, TrendBucket
from ecopulse.analytics.trends import build_trend, category_histogram, severity_histogram
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import COMMUNITY_REPORTS, CRITICAL, ENVIRONMENTAL_DATA, PREDICTIONS

logger = logging.getLogger(__name__)


async def _safe_select(store: RecordStore, collection: str, **kwargs: object) -> list[Row]:
    try:
        return await store.select(collection, **kwargs)  # type: ignore[arg-type]
    except StoreError:
        logger.warning("Analytics read failed for %s, using empty set", collection, exc_info=True)
        return []


async def get_analytics_summary(
    store: RecordStore,
    today: date | None = None,
    sample_limit: int = 100,
    window_days: int = 7,
) -> AnalyticsSummaryResponse:
    """Totals, severity/category histograms and the daily trend."""
    if today is None:
        today = datetime.now(timezone.utc).date()

    records = await _safe_select(
        store, ENVIRONMENTAL_DATA, order_by="recorded_at", ascending=False, limit=sample_limit,
    )
    reports = await _safe_select(store, COMMUNITY_REPORTS)
    predictions = await _safe_select(store, PREDICTIONS)

    return AnalyticsSummaryResponse(
        total_records=len(records),
        total_reports=len(reports),
        total_predictions=len(predictions),
        critical_alerts=sum(1 for r in records if r.get("severity_level") == CRITICAL),
        severity_counts=severity_histogram(records),
        category_counts=category_histogram(records),
        trend=[TrendBucket(**bucket) for bucket in build_trend(records, today, window_days)],
    )
