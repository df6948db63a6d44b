"""
Leaderboard ranking - pure functions over the player list

Rules:
  - Order: score descending, ties keep registry (insertion) order
  - Status: every player tied at the top score is "winning", every player
    tied at the bottom score is "losing", everyone else "neutral"
  - A lone player, or a roster where everyone has the same score, is all
    "neutral" (nobody is ahead of anybody)
  - Progress: score / max(1, top score)
"""
from typing import Dict, List, Sequence

from turfwars.models import Player, PlayerStatus


def rank(players: Sequence[Player]) -> List[Player]:
    """
    Sort players for display

    Args:
        players: Players in registry order

    Returns:
        New list, score descending; sorted() is stable so ties keep input order
    """
    return sorted(players, key=lambda p: -p.score)


def derive_status(players: Sequence[Player]) -> Dict[str, PlayerStatus]:
    """
    Compute the status label of every player from scores alone

    Args:
        players: Players in registry order

    Returns:
        Mapping player id -> PlayerStatus
    """
    if not players:
        return {}

    scores = [p.score for p in players]
    top = max(scores)
    bottom = min(scores)

    if len(players) == 1 or top == bottom:
        return {p.id: PlayerStatus.NEUTRAL for p in players}

    statuses = {}
    for p in players:
        if p.score == top:
            statuses[p.id] = PlayerStatus.WINNING
        elif p.score == bottom:
            statuses[p.id] = PlayerStatus.LOSING
        else:
            statuses[p.id] = PlayerStatus.NEUTRAL
    return statuses


def relative_progress(player: Player, players: Sequence[Player]) -> float:
    """Player score relative to the leader, in [0, 1]"""
    top_score = max((p.score for p in players), default=0)
    return min(1.0, player.score / max(1, top_score))


def leaderboard_rows(players: Sequence[Player]) -> List[Dict]:
    """
    Assemble display rows for the scoreboard

    Returns:
        List of dicts with rank (1-based), id, name, color, initial, score,
        status, progress and is_leader
    """
    ordered = rank(players)
    statuses = derive_status(players)

    rows = []
    for idx, player in enumerate(ordered):
        rows.append({
            "rank": idx + 1,
            "id": player.id,
            "name": player.name,
            "color": player.color,
            "initial": player.name[:1].upper(),
            "score": player.score,
            "status": statuses[player.id].value,
            "progress": round(relative_progress(player, players), 4),
            "is_leader": idx == 0,
        })
    return rows
