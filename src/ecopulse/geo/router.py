"""Map endpoints: layer catalogue and markers."""

from fastapi import APIRouter, Depends, Query

from ecopulse.auth.dependencies import get_current_user_id
from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.geo.layers import ALL_LAYERS, LAYER_OPTIONS
from ecopulse.geo.schemas import LayerOption, MapLayerResponse
from ecopulse.geo.service import load_map_layer
from ecopulse.store.base import RecordStore

router = APIRouter(prefix="/api/v1/map", tags=["Map"])


@router.get("/layers", response_model=list[LayerOption])
async def layer_options() -> list[dict[str, str]]:
    """Layer keys the map can be filtered by."""
    return LAYER_OPTIONS


@router.get("/markers", response_model=MapLayerResponse)
async def map_markers(
    layers: list[str] = Query([ALL_LAYERS]),
    _user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> MapLayerResponse:
    """Recent environmental records coloured by severity, filtered by layer.

    Pass ``layers`` repeatedly; ``all`` disables filtering. An explicit empty
    selection is expressed by ``layers=`` and yields no markers.
    """
    active = [layer for layer in layers if layer]
    return await load_map_layer(store, active, limit=get_settings().map_fetch_limit)
