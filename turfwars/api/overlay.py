"""
AI overlay endpoints (predicted contested routes)
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException
import logging

from turfwars import state
from turfwars.api.session import get_session
from turfwars.exceptions import OverlayRequestFailed
from turfwars.models import BoundingBox
from turfwars.services.overlay import build_overlay_request, run_overlay_request


router = APIRouter(prefix="/overlay", tags=["overlay"])
logger = logging.getLogger(__name__)


@router.get("")
async def get_overlay():
    """Current overlay (image data URI, bounds, pending flag)"""
    return get_session().snapshot().overlay.model_dump()


@router.post("/predict", status_code=202)
async def predict_overlay(background_tasks: BackgroundTasks, payload: Optional[dict] = None):
    """
    Start a prediction; the result shows up in GET /overlay when ready.
    A newer request supersedes any in-flight one.

    Request (all optional):
        {
            "map_image": "data:image/png;base64,...",
            "bounds": {"south": 37.75, "west": -122.44, "north": 37.79, "east": -122.40}
        }
    """
    session = get_session()
    if state.OVERLAY_PREDICTOR is None:
        raise HTTPException(status_code=503, detail="Overlay predictor is not initialised")

    payload = payload or {}
    try:
        bounds = BoundingBox(**payload["bounds"]) if payload.get("bounds") else None
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid bounds: {e}")

    try:
        request = build_overlay_request(session, payload.get("map_image"), bounds)
    except OverlayRequestFailed as e:
        session.notify("Prediction Failed", str(e), variant="destructive")
        raise HTTPException(status_code=400, detail={"error": "overlay_request_failed", "message": str(e)})

    request_id = session.begin_overlay_request(request.bounds)
    background_tasks.add_task(run_overlay_request, session, state.OVERLAY_PREDICTOR, request_id, request)
    logger.info(f"🧠 Overlay request #{request_id} queued")

    return {
        "accepted": True,
        "request_id": request_id,
        "bounds": request.bounds.model_dump()
    }


@router.delete("")
async def hide_overlay():
    """Hide the overlay and discard any in-flight prediction"""
    session = get_session()
    session.hide_overlay()
    return {"success": True, "overlay": session.snapshot().overlay.model_dump()}
