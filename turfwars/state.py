"""
Global application state
Shared resources accessible across all routers
"""
import logging
from typing import Optional

from turfwars.core.session import GameSession
from turfwars.models import GameConfig
from turfwars.roster import build_registry
from turfwars.services.map_adapter import GeoJsonMapAdapter, MapAdapter
from turfwars.services.overlay import HttpOverlayPredictor, OverlayPredictor
from turfwars.services.place_lookup import PlaceLookup, create_place_lookup


logger = logging.getLogger(__name__)

# Effective configuration, loaded at startup
CONFIG: Optional[GameConfig] = None

# The single in-memory game session
SESSION: Optional[GameSession] = None

# Swappable collaborator adapters
MAP_ADAPTER: MapAdapter = GeoJsonMapAdapter()
PLACE_LOOKUP: Optional[PlaceLookup] = None
OVERLAY_PREDICTOR: Optional[OverlayPredictor] = None


def init_state(config: GameConfig) -> GameSession:
    """
    (Re)build the session and adapters from configuration

    Returns:
        The new GameSession
    """
    global CONFIG, SESSION, PLACE_LOOKUP, OVERLAY_PREDICTOR

    registry = build_registry(config)
    CONFIG = config
    SESSION = GameSession(registry, config.active_player_id, config)
    PLACE_LOOKUP = create_place_lookup(config.places)
    OVERLAY_PREDICTOR = HttpOverlayPredictor(config.overlay)

    logger.info(
        f"✅ Session ready: {len(registry)} players, active={config.active_player_id}, "
        f"places={config.places.provider}, scoring={config.scoring.mode}"
    )
    return SESSION
