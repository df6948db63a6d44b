"""
Session controller - the only mutable root of the game

Owns the player registry, the active player's path tracker and current
coordinate, the AI overlay slot and the notification queue. Every public
method takes the session lock, so a claim (read registry → validate →
mutate → recompute statuses) is atomic with respect to other requests.
"""
import json
import logging
import random
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Dict, List, Optional

from turfwars.core.claim import claim
from turfwars.core.geo import bounding_box
from turfwars.core.path_tracker import PathTracker
from turfwars.core.registry import PlayerRegistry
from turfwars.exceptions import LocationUnavailable
from turfwars.models import (
    BoundingBox, ClaimResult, Coordinate, GameConfig, MovementSample,
    Notification, OverlayState, Player, SessionSnapshot
)


logger = logging.getLogger(__name__)


class GameSession:
    """
    Single in-memory game session with one active (controlled) player.

    Args:
        registry: Canonical player registry (owned by the session from now on)
        active_player_id: Player controlled by this client
        config: Game configuration
        rng: Random source for the "random" scoring mode
    """

    def __init__(
        self,
        registry: PlayerRegistry,
        active_player_id: str,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None
    ) -> None:
        registry.get(active_player_id)

        self.config = config or GameConfig()
        self._registry = registry
        self._active_player_id = active_player_id
        self._rng = rng

        self._lock = threading.RLock()
        self._tracker = PathTracker()
        self._current: Optional[Coordinate] = None
        self._location_label: Optional[str] = None

        self._movements: deque = deque(maxlen=self.config.session.movement_history_limit)
        self._notifications: deque = deque(maxlen=self.config.session.notification_limit)

        self._overlay = OverlayState()
        self._overlay_seq = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def active_player_id(self) -> str:
        return self._active_player_id

    @property
    def is_location_set(self) -> bool:
        with self._lock:
            return self._current is not None

    def snapshot(self) -> SessionSnapshot:
        """Frozen deep copy of the session for renderers and the overlay flow"""
        with self._lock:
            return SessionSnapshot(
                players=tuple(self._registry.copy_players()),
                active_player_id=self._active_player_id,
                active_path=tuple(self._tracker.points()),
                current_coordinate=self._current,
                location_label=self._location_label,
                overlay=self._overlay,
            )

    def players(self) -> List[Player]:
        with self._lock:
            return self._registry.copy_players()

    # ------------------------------------------------------------------
    # Location and drawing
    # ------------------------------------------------------------------

    def set_location(self, coord: Coordinate, label: Optional[str] = None, restart: bool = False) -> None:
        """
        Update the active player's real-world position

        The first call of the session also starts the path at coord, and so
        does any call with restart=True (a newly chosen starting place). With
        session.follow_location enabled, other calls extend the path.

        Raises:
            ValueError: label is not a string (nothing is changed)
        """
        if label is not None and not isinstance(label, str):
            raise ValueError(f"Location label must be a string, got {type(label).__name__}")

        with self._lock:
            first = self._current is None or restart
            self._current = coord
            if label is not None:
                self._location_label = label

            if first:
                self._tracker.reset(coord)
                logger.info(f"📍 Starting location set: {coord.lat:.5f}, {coord.lng:.5f} ({label or 'unnamed'})")
            elif self.config.session.follow_location:
                self._tracker.append(coord)

            self._movements.append(MovementSample(
                lat=coord.lat,
                lng=coord.lng,
                timestamp=datetime.now(timezone.utc).isoformat(),
            ))

    def on_map_interaction(self, coord: Coordinate) -> bool:
        """
        Add a tapped/clicked point to the active path

        Returns:
            False (and does nothing) while no location has been set
        """
        with self._lock:
            if self._current is None:
                return False
            self._tracker.append(coord)
            return True

    def set_color(self, player_id: str, color: str) -> Player:
        """Change a player's display colour; score and status are untouched"""
        with self._lock:
            player = self._registry.set_color(player_id, color)
            logger.info(f"🎨 Player {player_id} colour → {color}")
            return player.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Claiming
    # ------------------------------------------------------------------

    def claim_active_territory(self) -> ClaimResult:
        """
        Claim the current path for the active player

        On success the path restarts at the current coordinate. On failure
        nothing changes and the error propagates.

        Raises:
            LocationUnavailable: no location set yet
            InvalidPathError: path has fewer than 3 distinct vertices
        """
        with self._lock:
            if self._current is None:
                raise LocationUnavailable("Set a starting location before claiming territory")

            result = claim(
                self._registry,
                self._active_player_id,
                self._tracker.points(),
                self.config.scoring,
                self._rng,
            )
            self._tracker.reset(self._current)
            return result

    # ------------------------------------------------------------------
    # AI overlay (last request wins)
    # ------------------------------------------------------------------

    def default_overlay_bounds(self) -> Optional[BoundingBox]:
        """Box around every territory, the active path and the current position"""
        with self._lock:
            coords = [c for p in self._registry.players() for path in p.territory.paths for c in path]
            coords.extend(self._tracker.points())
            if self._current is not None:
                coords.append(self._current)
            return bounding_box(coords, self.config.overlay.bbox_padding_deg)

    def movement_patterns(self) -> str:
        """JSON document {player_id: [{lat, lng, timestamp}, ...]} for the predictor"""
        with self._lock:
            patterns: Dict[str, List[Dict]] = {
                self._active_player_id: [m.model_dump() for m in self._movements]
            }
            return json.dumps(patterns)

    def begin_overlay_request(self, bounds: BoundingBox) -> int:
        """Register a new overlay request; any in-flight one is superseded"""
        with self._lock:
            self._overlay_seq += 1
            self._overlay = OverlayState(
                image=self._overlay.image,
                bounds=self._overlay.bounds,
                pending=True,
                request_id=self._overlay_seq,
            )
            return self._overlay_seq

    def complete_overlay_request(self, request_id: int, image: str, bounds: BoundingBox) -> bool:
        """
        Publish a predictor result

        Returns:
            False when a newer request (or hide) superseded this one
        """
        with self._lock:
            if request_id != self._overlay_seq:
                logger.info(f"⏭️ Dropping stale overlay result #{request_id} (latest #{self._overlay_seq})")
                return False
            self._overlay = OverlayState(image=image, bounds=bounds, pending=False, request_id=request_id)
            self.notify("Prediction Complete", "High-traffic routes are now shown on the map.")
            return True

    def fail_overlay_request(self, request_id: int, reason: str) -> bool:
        """Clear the overlay after a failed request; stale failures are ignored"""
        with self._lock:
            if request_id != self._overlay_seq:
                return False
            logger.warning(f"⚠️ Overlay request #{request_id} failed: {reason}")
            self._overlay = OverlayState(request_id=request_id)
            self.notify("Prediction Failed", "Could not generate high-traffic routes.", variant="destructive")
            return True

    def hide_overlay(self) -> None:
        with self._lock:
            self._overlay_seq += 1
            self._overlay = OverlayState(request_id=self._overlay_seq)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        with self._lock:
            self._notifications.append(Notification(title=title, description=description, variant=variant))

    def drain_notifications(self) -> List[Notification]:
        with self._lock:
            items = list(self._notifications)
            self._notifications.clear()
            return items
