"""
AI overlay - predicted high-traffic (contested) routes

Flow:
  1. build_overlay_request() snapshots the session into a predictor payload
  2. session.begin_overlay_request() hands out a request id
  3. run_overlay_request() calls the predictor (in a background task) and
     publishes the result only if no newer request was made meanwhile

A failed prediction clears the overlay and queues a notification; the
session keeps working without it.
"""
import logging
import os
import re
from abc import ABC, abstractmethod
from typing import Optional

import requests

from turfwars.core.session import GameSession
from turfwars.exceptions import OverlayRequestFailed
from turfwars.models import BoundingBox, OverlayParams, OverlayRequest


logger = logging.getLogger(__name__)

# data:<mimetype>;base64,<encoded_data>
DATA_URI_PATTERN = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,[A-Za-z0-9+/=\s]+$")


def is_data_uri(value) -> bool:
    return isinstance(value, str) and bool(DATA_URI_PATTERN.match(value))


class OverlayPredictor(ABC):
    """Generative route predictor: request in, image data URI out"""

    @abstractmethod
    def predict(self, request: OverlayRequest) -> str:
        """
        Raises:
            OverlayRequestFailed: on any provider failure
        """
        ...


class HttpOverlayPredictor(OverlayPredictor):
    """
    Posts to a prediction endpoint

    Request:
        {"territoryMapData": "data:image/png;base64,...",
         "userMovementPatterns": "{\"user_1\": [...]}"}

    Response:
        {"predictedRoutesOverlay": "data:image/png;base64,..."}
    """

    def __init__(self, params: OverlayParams) -> None:
        self.params = params

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        api_key = os.environ.get(self.params.api_key_env)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    def predict(self, request: OverlayRequest) -> str:
        if not self.params.endpoint:
            raise OverlayRequestFailed("No overlay endpoint configured")

        try:
            resp = requests.post(
                self.params.endpoint,
                json={
                    "territoryMapData": request.territory_map_data,
                    "userMovementPatterns": request.user_movement_patterns,
                },
                headers=self._headers(),
                timeout=self.params.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise OverlayRequestFailed(f"Overlay request failed: {e}") from e
        except ValueError as e:
            raise OverlayRequestFailed(f"Overlay response is not JSON: {e}") from e

        overlay = data.get("predictedRoutesOverlay") if isinstance(data, dict) else None
        if not overlay:
            raise OverlayRequestFailed("No overlay data returned.")
        if not is_data_uri(overlay):
            raise OverlayRequestFailed("Overlay is not a base64 data URI")
        return overlay


def build_overlay_request(
    session: GameSession,
    map_image: Optional[str] = None,
    bounds: Optional[BoundingBox] = None
) -> OverlayRequest:
    """
    Assemble the predictor payload from the current session

    Args:
        session: Game session
        map_image: Territory map data URI (configured placeholder if None)
        bounds: Overlay bounds (box around all territories if None)

    Raises:
        OverlayRequestFailed: nothing on the map to bound the overlay, or
            the map image is not a data URI
    """
    map_image = map_image or session.config.overlay.placeholder_map_image
    if not is_data_uri(map_image):
        raise OverlayRequestFailed("Territory map must be a base64 data URI")

    bounds = bounds or session.default_overlay_bounds()
    if bounds is None:
        raise OverlayRequestFailed("Nothing on the map to predict routes for")

    return OverlayRequest(
        territory_map_data=map_image,
        user_movement_patterns=session.movement_patterns(),
        bounds=bounds,
    )


def run_overlay_request(
    session: GameSession,
    predictor: OverlayPredictor,
    request_id: int,
    request: OverlayRequest
) -> bool:
    """
    Call the predictor and publish the outcome on the session

    Returns:
        True if the result was displayed, False if it failed or went stale
    """
    try:
        image = predictor.predict(request)
        if not is_data_uri(image):
            raise OverlayRequestFailed("Overlay is not a base64 data URI")
    except OverlayRequestFailed as e:
        logger.error(f"❌ Overlay request #{request_id} failed: {e}")
        session.fail_overlay_request(request_id, str(e))
        return False
    except Exception as e:
        logger.exception(f"❌ Overlay request #{request_id} crashed: {e}")
        session.fail_overlay_request(request_id, "Unexpected error while predicting routes")
        return False

    published = session.complete_overlay_request(request_id, image, request.bounds)
    if published:
        logger.info(f"🧠 Overlay request #{request_id} displayed")
    return published
