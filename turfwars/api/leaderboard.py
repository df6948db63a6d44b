"""
Leaderboard endpoint
"""
from fastapi import APIRouter

from turfwars import state
from turfwars.core.leaderboard import leaderboard_rows


router = APIRouter(tags=["leaderboard"])


@router.get("/api/leaderboard")
async def get_leaderboard():
    """
    Ranked scoreboard

    Returns, per player: rank, name, colour, initial, score (m² points),
    status (winning/losing/neutral), progress relative to the leader
    """
    if state.SESSION is None:
        return {"players": [], "total_players": 0}

    rows = leaderboard_rows(state.SESSION.players())
    return {
        "active_player_id": state.SESSION.active_player_id,
        "players": rows,
        "total_players": len(rows)
    }
