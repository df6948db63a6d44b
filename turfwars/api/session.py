"""
Session endpoints: location, drawing, claiming, colour and snapshots
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException
import logging

from turfwars import state
from turfwars.core.session import GameSession
from turfwars.exceptions import InvalidPathError, LocationUnavailable, UnknownPlayerError
from turfwars.normalizer import normalize_coordinate


router = APIRouter(prefix="/session", tags=["session"])
logger = logging.getLogger(__name__)


def get_session() -> GameSession:
    if state.SESSION is None:
        raise HTTPException(status_code=503, detail="Game session is not initialised")
    return state.SESSION


def read_text_field(payload: dict, key: str) -> Optional[str]:
    """Stripped string value of payload[key]; None when missing or blank, 400 when not a string"""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{key} must be a string")
    return value.strip() or None


@router.get("")
async def get_snapshot():
    """Current session snapshot (players, active path, current coordinate, overlay)"""
    return get_session().snapshot().model_dump(mode="json")


@router.get("/map")
async def get_map():
    """Snapshot rendered by the configured map adapter (GeoJSON by default)"""
    return state.MAP_ADAPTER.render(get_session().snapshot())


@router.post("/location")
async def set_location(payload: dict):
    """
    Set the active player's position

    Request:
        {"lat": 37.77, "lng": -122.41, "label": "Golden Gate Park"}  # label optional
    """
    session = get_session()
    label = read_text_field(payload, "label")
    try:
        coord = normalize_coordinate(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid coordinate: {e}")

    session.set_location(coord, label)
    return {
        "success": True,
        "current_coordinate": coord.model_dump(),
        "path_length": len(session.snapshot().active_path)
    }


@router.post("/interaction")
async def map_interaction(payload: Any = Body(...)):
    """
    Add a clicked/tapped point to the active path

    Accepts any coordinate shape the normalizer understands, e.g.
        {"lngLat": {"lng": -122.41, "lat": 37.77}}
    """
    session = get_session()
    try:
        coord = state.MAP_ADAPTER.on_interaction(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid coordinate: {e}")

    accepted = session.on_map_interaction(coord)
    return {
        "accepted": accepted,
        "path_length": len(session.snapshot().active_path),
        "message": None if accepted else "Set a starting location first"
    }


@router.post("/claim")
async def claim_territory():
    """Claim the active path as territory for the active player"""
    session = get_session()
    try:
        result = session.claim_active_territory()
    except InvalidPathError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_path", "message": str(e)})
    except UnknownPlayerError as e:
        raise HTTPException(status_code=404, detail={"error": "unknown_player", "message": str(e)})
    except LocationUnavailable as e:
        raise HTTPException(status_code=409, detail={"error": "location_unavailable", "message": str(e)})

    return {
        "success": True,
        "score_delta": result.score_delta,
        "score": result.player.score,
        "area_m2": result.area_m2,
        "player": result.player.model_dump(mode="json"),
        "path": [c.model_dump() for c in result.path],
        "message": f"Territory claimed! +{result.score_delta}"
    }


@router.post("/color")
async def set_color(payload: dict):
    """
    Change the active player's colour

    Request:
        {"color": "#33FF57"}  # must be one of the configured palette colours
    """
    session = get_session()
    color = read_text_field(payload, "color")
    if not color:
        raise HTTPException(status_code=400, detail="color is required")

    palette = [c.upper() for c in state.CONFIG.palette] if state.CONFIG else []
    if palette and color.upper() not in palette:
        raise HTTPException(status_code=400, detail=f"color must be one of {state.CONFIG.palette}")

    player = session.set_color(session.active_player_id, color)
    return {"success": True, "player": player.model_dump(mode="json")}


@router.get("/notifications")
async def get_notifications():
    """Drain queued user-visible notifications"""
    items = get_session().drain_notifications()
    return {"notifications": [n.model_dump() for n in items]}
