"""
Health check endpoint
"""
from fastapi import APIRouter
from turfwars import state


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Turf Wars - Session Server",
        "version": "1.0.0",
        "total_players": len(state.SESSION.players()) if state.SESSION else 0,
        "location_set": state.SESSION.is_location_set if state.SESSION else False
    }
