"""Analytics endpoints."""

from fastapi import APIRouter, Depends

from ecopulse.analytics.schemas import AnalyticsSummaryResponse
from ecopulse.analytics.service import get_analytics_summary
from ecopulse.auth.dependencies import get_current_user_id
from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.store.base import RecordStore

router = APIRouter(prefix="/api/v1/analytics", tags=["Analytics"])


@router.get("/summary", response_model=AnalyticsSummaryResponse)
async def analytics_summary(
    _user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> AnalyticsSummaryResponse:
    """Record/report/prediction totals, histograms and the daily alert trend."""
    settings = get_settings()
    return await get_analytics_summary(
        store,
        sample_limit=settings.analytics_fetch_limit,
        window_days=settings.trend_window_days,
    )
