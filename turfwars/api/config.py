"""
Configuration endpoint
"""
from fastapi import APIRouter, HTTPException

from turfwars import state


router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config():
    """Get the effective game configuration (env var names only, never secrets)"""
    if state.CONFIG is None:
        raise HTTPException(status_code=500, detail="Configuration is not loaded")

    config = state.CONFIG
    return {
        "active_player_id": config.active_player_id,
        "palette": config.palette,
        "scoring": config.scoring.model_dump(),
        "session": config.session.model_dump(),
        "overlay": {
            "configured": bool(config.overlay.endpoint),
            "api_key_env": config.overlay.api_key_env,
            "timeout": config.overlay.timeout,
            "bbox_padding_deg": config.overlay.bbox_padding_deg,
        },
        "places": {
            "provider": config.places.provider,
            "access_token_env": config.places.access_token_env,
            "min_query_length": config.places.min_query_length,
            "limit": config.places.limit,
        },
        "roster": [{"id": e.id, "name": e.name} for e in config.roster],
    }
