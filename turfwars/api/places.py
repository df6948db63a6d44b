"""
Starting-location search endpoints
"""
from fastapi import APIRouter, HTTPException
import logging

from turfwars import state
from turfwars.api.session import get_session, read_text_field
from turfwars.exceptions import LocationUnavailable, PlaceLookupFailed
from turfwars.normalizer import normalize_coordinate


router = APIRouter(prefix="/places", tags=["places"])
logger = logging.getLogger(__name__)


@router.get("")
def search_places(q: str = ""):
    """
    Autocomplete candidates for a free-text query

    Runs in the threadpool; providers block on HTTP.
    """
    if state.PLACE_LOOKUP is None:
        raise HTTPException(status_code=503, detail="Place lookup is not initialised")
    try:
        candidates = state.PLACE_LOOKUP.lookup_place(q)
    except PlaceLookupFailed as e:
        raise HTTPException(status_code=502, detail={"error": "place_lookup_failed", "message": str(e)})

    return {
        "query": q,
        "candidates": [c.model_dump() for c in candidates]
    }


@router.post("/select")
async def select_place(payload: dict):
    """
    Use a chosen candidate as the new starting location (restarts the path)

    Request:
        {"label": "Golden Gate Park, San Francisco", "coordinate": {"lat": 37.77, "lng": -122.45}}
    """
    session = get_session()
    label = read_text_field(payload, "label")
    try:
        raw = payload.get("coordinate")
        if raw is None:
            raise LocationUnavailable("Selected place has no coordinate")
        coord = normalize_coordinate(raw)
    except LocationUnavailable as e:
        raise HTTPException(status_code=409, detail={"error": "location_unavailable", "message": str(e)})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid coordinate: {e}")

    session.set_location(coord, label, restart=True)
    return {
        "success": True,
        "location_label": label,
        "current_coordinate": coord.model_dump()
    }
