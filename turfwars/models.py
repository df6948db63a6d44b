"""
Data models for the territory game session
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """WGS84 point in decimal degrees"""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class PlayerStatus(str, Enum):
    WINNING = "winning"
    LOSING = "losing"
    NEUTRAL = "neutral"


class Territory(BaseModel):
    """Claimed polygons, stored open (first vertex is not repeated)"""
    paths: List[List[Coordinate]] = []


class Player(BaseModel):
    """One roster entry; status is derived from score by the ranker"""
    id: str
    name: str
    color: str
    score: int = Field(default=0, ge=0)
    status: PlayerStatus = PlayerStatus.NEUTRAL
    territory: Territory = Field(default_factory=Territory)


class ClaimResult(BaseModel):
    """Outcome of a successful claim"""
    player: Player
    path: List[Coordinate]
    score_delta: int
    area_m2: float


class BoundingBox(BaseModel):
    """Overlay placement bounds (south-west / north-east corners)"""
    south: float = Field(ge=-90.0, le=90.0)
    west: float = Field(ge=-180.0, le=180.0)
    north: float = Field(ge=-90.0, le=90.0)
    east: float = Field(ge=-180.0, le=180.0)


class OverlayState(BaseModel):
    """Current AI overlay as seen by the renderer"""
    model_config = ConfigDict(frozen=True)

    image: Optional[str] = None
    bounds: Optional[BoundingBox] = None
    pending: bool = False
    request_id: int = 0


class OverlayRequest(BaseModel):
    """Payload handed to the overlay predictor"""
    territory_map_data: str
    user_movement_patterns: str
    bounds: BoundingBox


class Notification(BaseModel):
    """User-visible message (the front end shows it as a toast)"""
    title: str
    description: str
    variant: str = "default"  # "default" | "destructive"


class MovementSample(BaseModel):
    lat: float
    lng: float
    timestamp: str  # ISO-8601, UTC


class SessionSnapshot(BaseModel):
    """Point-in-time read-only copy of the session"""
    model_config = ConfigDict(frozen=True)

    players: Tuple[Player, ...]
    active_player_id: str
    active_path: Tuple[Coordinate, ...]
    current_coordinate: Optional[Coordinate] = None
    location_label: Optional[str] = None
    overlay: OverlayState = OverlayState()


class PlaceCandidate(BaseModel):
    """Provider-neutral place lookup result"""
    id: str
    label: str
    coordinate: Coordinate


# ==================== CONFIGURATION ====================

class ScoringParams(BaseModel):
    """Claim scoring parameters"""
    mode: str = "area"                      # "area" | "random"
    square_metres_per_point: float = Field(default=1000.0, gt=0)
    random_min: int = Field(default=50, ge=0)
    random_max: int = Field(default=250, ge=0)


class SessionParams(BaseModel):
    follow_location: bool = False           # location updates also extend the path
    movement_history_limit: int = Field(default=500, ge=1)
    notification_limit: int = Field(default=50, ge=1)


class OverlayParams(BaseModel):
    endpoint: Optional[str] = None
    api_key_env: str = "TURFWARS_OVERLAY_API_KEY"
    timeout: float = 60.0
    placeholder_map_image: str = (
        "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
    )
    bbox_padding_deg: float = Field(default=0.005, ge=0)


class GazetteerEntry(BaseModel):
    label: str
    lat: float
    lng: float


class PlaceParams(BaseModel):
    provider: str = "static"                # "static" | "mapbox"
    access_token_env: str = "MAPBOX_ACCESS_TOKEN"
    min_query_length: int = Field(default=3, ge=1)
    limit: int = Field(default=5, ge=1)
    timeout: float = 10.0
    gazetteer: List[GazetteerEntry] = []


class RosterEntry(BaseModel):
    id: str
    name: str
    color: str
    score: int = Field(default=0, ge=0)
    territory: List[List[Coordinate]] = []


class GameConfig(BaseModel):
    """Top-level configuration loaded from YAML"""
    active_player_id: str = "user_1"
    roster: List[RosterEntry] = Field(default_factory=lambda: _default_roster())
    palette: List[str] = Field(default_factory=lambda: _default_palette())
    scoring: ScoringParams = ScoringParams()
    session: SessionParams = SessionParams()
    overlay: OverlayParams = OverlayParams()
    places: PlaceParams = PlaceParams()


def _default_roster() -> List[RosterEntry]:
    from turfwars.roster import DEFAULT_ROSTER
    return [RosterEntry(**entry) for entry in DEFAULT_ROSTER]


def _default_palette() -> List[str]:
    from turfwars.roster import AVAILABLE_COLORS
    return list(AVAILABLE_COLORS)
