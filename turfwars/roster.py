"""
Default roster and registry construction
"""
from typing import List

from turfwars.core.claim import validate_path
from turfwars.core.registry import PlayerRegistry
from turfwars.models import GameConfig, Player, RosterEntry, Territory


# Selectable player colours
AVAILABLE_COLORS = [
    "#FF5733",  # Red-Orange
    "#33FF57",  # Green
    "#3357FF",  # Blue
    "#FF33A1",  # Pink
    "#F3FF33",  # Yellow
]

# Four players with one square each around San Francisco
DEFAULT_ROSTER = [
    {
        "id": "user_1",
        "name": "Player One",
        "color": "#3357FF",
        "score": 1250,
        "territory": [[
            {"lat": 37.78, "lng": -122.42},
            {"lat": 37.78, "lng": -122.41},
            {"lat": 37.77, "lng": -122.41},
            {"lat": 37.77, "lng": -122.42},
        ]],
    },
    {
        "id": "user_2",
        "name": "CyberNomad",
        "color": "#FF5733",
        "score": 980,
        "territory": [[
            {"lat": 37.79, "lng": -122.43},
            {"lat": 37.79, "lng": -122.42},
            {"lat": 37.78, "lng": -122.42},
            {"lat": 37.78, "lng": -122.43},
        ]],
    },
    {
        "id": "user_3",
        "name": "ShadowStrider",
        "color": "#33FF57",
        "score": 1100,
        "territory": [[
            {"lat": 37.76, "lng": -122.41},
            {"lat": 37.76, "lng": -122.40},
            {"lat": 37.75, "lng": -122.40},
            {"lat": 37.75, "lng": -122.41},
        ]],
    },
    {
        "id": "user_4",
        "name": "PixelProwler",
        "color": "#FF33A1",
        "score": 750,
        "territory": [[
            {"lat": 37.77, "lng": -122.44},
            {"lat": 37.77, "lng": -122.43},
            {"lat": 37.76, "lng": -122.43},
            {"lat": 37.76, "lng": -122.44},
        ]],
    },
]


def entry_to_player(entry: RosterEntry) -> Player:
    """
    Raises:
        InvalidPathError: a configured territory is not a polygon
    """
    for path in entry.territory:
        validate_path(path)
    return Player(
        id=entry.id,
        name=entry.name,
        color=entry.color,
        score=entry.score,
        territory=Territory(paths=[list(path) for path in entry.territory]),
    )


def build_registry(config: GameConfig) -> PlayerRegistry:
    """
    Build the session registry from the configured roster

    Statuses are derived from the scores, never read from config.

    Raises:
        InvalidPathError: a roster territory has fewer than 3 distinct vertices
        DuplicatePlayerError: two roster entries share an id
        UnknownPlayerError: active_player_id is not on the roster
    """
    players: List[Player] = [entry_to_player(e) for e in config.roster]
    registry = PlayerRegistry(players)
    registry.get(config.active_player_id)
    return registry
