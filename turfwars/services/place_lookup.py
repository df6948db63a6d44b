"""
Place lookup providers

Every provider returns provider-neutral PlaceCandidate objects; the session
only ever consumes a candidate's label and coordinate.
"""
import logging
import os
from abc import ABC, abstractmethod
from typing import List
from urllib.parse import quote

import requests

from turfwars.exceptions import PlaceLookupFailed
from turfwars.models import Coordinate, PlaceCandidate, PlaceParams
from turfwars.normalizer import normalize_coordinate


logger = logging.getLogger(__name__)

MAPBOX_GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json"


class PlaceLookup(ABC):
    """Free-text place search"""

    def __init__(self, params: PlaceParams) -> None:
        self.params = params

    def lookup_place(self, query: str) -> List[PlaceCandidate]:
        """
        Search for places matching a free-text query

        Queries shorter than min_query_length return [] without hitting
        the provider.

        Raises:
            PlaceLookupFailed: provider unavailable or returned garbage
        """
        query = (query or "").strip()
        if len(query) < self.params.min_query_length:
            return []
        return self._search(query)[: self.params.limit]

    @abstractmethod
    def _search(self, query: str) -> List[PlaceCandidate]:
        ...


class StaticPlaceLookup(PlaceLookup):
    """Case-insensitive substring search over the configured gazetteer"""

    def _search(self, query: str) -> List[PlaceCandidate]:
        needle = query.lower()
        results = []
        for idx, entry in enumerate(self.params.gazetteer):
            if needle in entry.label.lower():
                results.append(PlaceCandidate(
                    id=f"static-{idx}",
                    label=entry.label,
                    coordinate=Coordinate(lat=entry.lat, lng=entry.lng),
                ))
        return results


class MapboxPlaceLookup(PlaceLookup):
    """Mapbox forward geocoding with autocomplete"""

    def _access_token(self) -> str:
        token = os.environ.get(self.params.access_token_env)
        if not token:
            raise PlaceLookupFailed(f"Mapbox token not found in ${self.params.access_token_env}")
        return token

    def _search(self, query: str) -> List[PlaceCandidate]:
        url = MAPBOX_GEOCODING_URL.format(query=quote(query, safe=""))
        try:
            resp = requests.get(
                url,
                params={
                    "access_token": self._access_token(),
                    "autocomplete": "true",
                    "limit": self.params.limit,
                },
                timeout=self.params.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.error(f"❌ Mapbox lookup failed for '{query}': {e}")
            raise PlaceLookupFailed(f"Place lookup failed: {e}") from e
        except ValueError as e:
            raise PlaceLookupFailed(f"Place lookup returned invalid JSON: {e}") from e

        results = []
        for feature in data.get("features") or []:
            try:
                # center is [lng, lat]
                coordinate = normalize_coordinate(feature["center"])
            except (KeyError, ValueError) as e:
                logger.warning(f"⚠️ Skipping Mapbox feature without usable center: {e}")
                continue
            results.append(PlaceCandidate(
                id=str(feature.get("id", "")),
                label=feature.get("place_name", ""),
                coordinate=coordinate,
            ))
        return results


PROVIDERS = {
    "static": StaticPlaceLookup,
    "mapbox": MapboxPlaceLookup,
}


def create_place_lookup(params: PlaceParams) -> PlaceLookup:
    """Instantiate the configured provider"""
    provider = PROVIDERS.get(params.provider)
    if provider is None:
        raise ValueError(f"Unknown place lookup provider: {params.provider}")
    return provider(params)
