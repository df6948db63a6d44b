"""
Map rendering adapters

The session never talks to a map SDK directly. A MapAdapter turns a
snapshot into whatever its host draws, and turns raw pointer events back
into Coordinates.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from turfwars.core.geo import closed_ring
from turfwars.models import Coordinate, SessionSnapshot
from turfwars.normalizer import normalize_coordinate


TERRITORY_FILL_OPACITY = 0.35
TERRITORY_LINE_WIDTH = 2
PATH_LINE_WIDTH = 4


class MapAdapter(ABC):
    """Capability interface for a rendering host"""

    @abstractmethod
    def render(self, snapshot: SessionSnapshot) -> Any:
        ...

    def on_interaction(self, raw: Any) -> Coordinate:
        return normalize_coordinate(raw)


def _position(coord: Coordinate) -> List[float]:
    return [coord.lng, coord.lat]


class GeoJsonMapAdapter(MapAdapter):
    """Renders a snapshot as a GeoJSON FeatureCollection (positions are [lng, lat])"""

    def render(self, snapshot: SessionSnapshot) -> Dict:
        features = []

        for player in snapshot.players:
            for index, path in enumerate(player.territory.paths):
                features.append({
                    "type": "Feature",
                    "id": f"{player.id}-{index}",
                    "properties": {
                        "kind": "territory",
                        "player_id": player.id,
                        "color": player.color,
                        "fill_opacity": TERRITORY_FILL_OPACITY,
                        "line_width": TERRITORY_LINE_WIDTH,
                    },
                    "geometry": {
                        "type": "Polygon",
                        "coordinates": [[_position(c) for c in closed_ring(path)]],
                    },
                })

        # A single vertex is not a line yet
        if len(snapshot.active_path) > 1:
            features.append({
                "type": "Feature",
                "id": "user-path",
                "properties": {
                    "kind": "active_path",
                    "player_id": snapshot.active_player_id,
                    "line_width": PATH_LINE_WIDTH,
                },
                "geometry": {
                    "type": "LineString",
                    "coordinates": [_position(c) for c in snapshot.active_path],
                },
            })

        if snapshot.current_coordinate is not None:
            features.append({
                "type": "Feature",
                "id": "current-position",
                "properties": {"kind": "current_position", "player_id": snapshot.active_player_id},
                "geometry": {"type": "Point", "coordinates": _position(snapshot.current_coordinate)},
            })

        overlay = snapshot.overlay
        return {
            "type": "FeatureCollection",
            "features": features,
            "overlay": {
                "image": overlay.image,
                "bounds": overlay.bounds.model_dump() if overlay.bounds else None,
                "pending": overlay.pending,
            },
        }
