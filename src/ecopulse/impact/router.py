"""Impact endpoints: personal score, activity and achievements."""

from fastapi import APIRouter, Depends

from ecopulse.auth.dependencies import get_current_user_id
from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.impact.schemas import ImpactSummaryResponse, ScoreResponse
from ecopulse.impact.service import compute_score, get_impact_summary
from ecopulse.store.base import RecordStore

router = APIRouter(prefix="/api/v1/impact", tags=["Impact"])


@router.get("/me", response_model=ImpactSummaryResponse)
async def my_impact(
    user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> ImpactSummaryResponse:
    """Current user's profile, recent actions and achievements."""
    return await get_impact_summary(store, user_id, get_settings().recent_actions_limit)


@router.get("/me/score", response_model=ScoreResponse)
async def my_score(
    user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> ScoreResponse:
    """Current user's impact score, summed from the action ledger."""
    return ScoreResponse(user_id=user_id, total_impact_score=await compute_score(store, user_id))
