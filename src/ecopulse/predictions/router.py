"""Prediction endpoints."""

from fastapi import APIRouter, Depends

from ecopulse.auth.dependencies import get_current_user_id
from ecopulse.dependencies import get_store
from ecopulse.predictions.schemas import PredictionView
from ecopulse.predictions.service import list_predictions
from ecopulse.store.base import RecordStore

router = APIRouter(prefix="/api/v1/predictions", tags=["Predictions"])


@router.get("", response_model=list[PredictionView])
async def predictions(
    _user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> list[PredictionView]:
    """Model forecasts, newest first."""
    return await list_predictions(store)
