"""
Normalizer for coordinate payloads from different map SDKs
"""
from typing import Any, Dict, List, Optional

from turfwars.models import Coordinate


# (latitude key, longitude key) pairs accepted in object payloads
_KEY_PAIRS = [
    ("lat", "lng"),
    ("lat", "lon"),
    ("latitude", "longitude"),
]


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except TypeError as e:
        raise ValueError(f"Not a number: {value!r}") from e


def _from_mapping(body: Dict) -> Optional[Coordinate]:
    for lat_key, lng_key in _KEY_PAIRS:
        if lat_key in body and lng_key in body:
            return Coordinate(lat=_to_float(body[lat_key]), lng=_to_float(body[lng_key]))
    return None


def normalize_coordinate(raw: Any) -> Coordinate:
    """
    Normalize a coordinate from a rendering/search provider

    Accepted formats:
        {"lat": 37.77, "lng": -122.41}            # Google / Leaflet LatLng
        {"lat": 37.77, "lon": -122.41}            # OSM / Nominatim
        {"latitude": 37.77, "longitude": -122.41} # device geolocation
        {"lngLat": {"lng": -122.41, "lat": 37.77}}  # Mapbox map event
        {"center": [-122.41, 37.77]}              # Mapbox geocoding feature
        [-122.41, 37.77]                          # GeoJSON position (lng, lat)

    Args:
        raw: Decoded JSON payload

    Returns:
        Coordinate

    Raises:
        ValueError: unrecognised shape or non-numeric values
        pydantic.ValidationError: latitude/longitude out of range
    """
    if isinstance(raw, Coordinate):
        return raw

    if isinstance(raw, (list, tuple)):
        return _from_position(raw)

    if isinstance(raw, dict):
        for nested in ("lngLat", "latlng", "coords", "coordinate"):
            if isinstance(raw.get(nested), dict):
                return normalize_coordinate(raw[nested])

        if isinstance(raw.get("center"), (list, tuple)):
            return _from_position(raw["center"])

        coord = _from_mapping(raw)
        if coord is not None:
            return coord

        raise ValueError(f"Unrecognised coordinate keys: {sorted(raw.keys())}")

    raise ValueError(f"Unsupported coordinate payload type: {type(raw).__name__}")


def _from_position(position: List) -> Coordinate:
    if len(position) < 2:
        raise ValueError(f"Position needs [lng, lat], got {position}")
    lng, lat = position[0], position[1]
    return Coordinate(lat=_to_float(lat), lng=_to_float(lng))
