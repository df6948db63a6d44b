"""
Pure geographic helpers for claimed polygons.
No side effects, no state.
"""
import math
from typing import Iterable, List, Optional, Sequence

from turfwars.models import BoundingBox, Coordinate


EARTH_RADIUS_M = 6_371_000.0


def distinct_vertex_count(path: Sequence[Coordinate]) -> int:
    """Number of distinct vertices in a path (order ignored)"""
    return len({(c.lat, c.lng) for c in path})


def _unwrap_longitudes(path: Sequence[Coordinate]) -> List[float]:
    # Keep consecutive vertices on the same side of the antimeridian
    lngs = []
    prev = None
    for c in path:
        lng = c.lng
        if prev is not None:
            while lng - prev > 180.0:
                lng -= 360.0
            while lng - prev < -180.0:
                lng += 360.0
        lngs.append(lng)
        prev = lng
    return lngs


def polygon_area_m2(path: Sequence[Coordinate]) -> float:
    """
    Planar area enclosed by a path, in square metres.

    The path is treated as implicitly closed. Vertices are projected with an
    equirectangular projection centred on the mean latitude of the polygon,
    then the shoelace formula is applied. Good enough for neighbourhood-sized
    claims; no ellipsoidal correction.

    Args:
        path: Polygon vertices in drawing order (either winding).

    Returns:
        Absolute enclosed area (0.0 for fewer than 3 vertices or a
        degenerate polygon).
    """
    if len(path) < 3:
        return 0.0

    lat0 = math.radians(sum(c.lat for c in path) / len(path))
    k = math.cos(lat0)
    lngs = _unwrap_longitudes(path)

    xs = [EARTH_RADIUS_M * math.radians(lng) * k for lng in lngs]
    ys = [EARTH_RADIUS_M * math.radians(c.lat) for c in path]

    twice_area = 0.0
    n = len(path)
    for i in range(n):
        j = (i + 1) % n
        twice_area += xs[i] * ys[j] - xs[j] * ys[i]

    return abs(twice_area) / 2.0


def closed_ring(path: Sequence[Coordinate]) -> List[Coordinate]:
    """Return the path with its first vertex repeated at the end (GeoJSON ring)"""
    ring = list(path)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def bounding_box(coords: Iterable[Coordinate], padding_deg: float = 0.0) -> Optional[BoundingBox]:
    """
    Smallest lat/lng box containing every coordinate, grown by padding.

    Returns:
        BoundingBox clamped to valid ranges, or None when coords is empty.
    """
    coords = list(coords)
    if not coords:
        return None

    south = min(c.lat for c in coords) - padding_deg
    north = max(c.lat for c in coords) + padding_deg
    west = min(c.lng for c in coords) - padding_deg
    east = max(c.lng for c in coords) + padding_deg

    return BoundingBox(
        south=max(-90.0, south),
        west=max(-180.0, west),
        north=min(90.0, north),
        east=min(180.0, east),
    )
