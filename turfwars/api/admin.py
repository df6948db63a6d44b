"""
Admin endpoints for session management
"""
from fastapi import APIRouter, HTTPException
import logging

from turfwars import state
from turfwars.exceptions import TurfWarsError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reset")
async def reset_session():
    """Rebuild the session from the loaded configuration (scores, paths, overlay)"""
    if state.CONFIG is None:
        raise HTTPException(status_code=500, detail="Configuration is not loaded")

    try:
        session = state.init_state(state.CONFIG)
    except TurfWarsError as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("🔄 Session reset")
    return {
        "success": True,
        "total_players": len(session.players()),
        "message": "Session reset"
    }
