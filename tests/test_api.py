"""
End-to-end tests for the HTTP surface
"""
import threading

import pytest
from fastapi.testclient import TestClient

from turfwars import state
from turfwars.main import app
from turfwars.models import PlaceParams
from turfwars.services.overlay import OverlayPredictor
from turfwars.services.place_lookup import PlaceLookup

from conftest import CONFIG_PATH


OVERLAY_IMAGE = "data:image/png;base64,iVBORw0KGgo="


class StubPredictor(OverlayPredictor):
    def predict(self, request):
        return OVERLAY_IMAGE


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("TURFWARS_CONFIG", str(CONFIG_PATH))
    with TestClient(app) as c:
        yield c


def _start(client, lat=37.77, lng=-122.41):
    resp = client.post("/session/location", json={"lat": lat, "lng": lng, "label": "Mission District"})
    assert resp.status_code == 200


def test_health(client):
    data = client.get("/").json()
    assert data["status"] == "ok"
    assert data["total_players"] == 4
    assert data["location_set"] is False


def test_config(client):
    data = client.get("/config").json()
    assert data["active_player_id"] == "user_1"
    assert data["places"]["provider"] == "static"
    assert data["overlay"]["configured"] is False
    assert len(data["palette"]) == 5


def test_leaderboard(client):
    data = client.get("/api/leaderboard").json()
    assert [p["id"] for p in data["players"]] == ["user_1", "user_3", "user_2", "user_4"]
    assert data["players"][0]["status"] == "winning"
    assert data["players"][-1]["status"] == "losing"


def test_interaction_before_location(client):
    data = client.post("/session/interaction", json={"lat": 37.78, "lng": -122.41}).json()
    assert data["accepted"] is False
    assert data["path_length"] == 0


def test_claim_single_point_rejected(client):
    """Location set, no drawing → 400 invalid_path and nothing changes"""
    _start(client)
    before = client.get("/session").json()

    resp = client.post("/session/claim")

    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "invalid_path"
    assert client.get("/session").json() == before


def test_claim_without_location(client):
    resp = client.post("/session/claim")
    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "location_unavailable"


def test_claim_flow(client):
    _start(client)
    client.post("/session/interaction", json={"lngLat": {"lng": -122.41, "lat": 37.78}})
    client.post("/session/interaction", json=[-122.40, 37.78])
    client.post("/session/interaction", json={"latitude": 37.77, "longitude": -122.40})

    resp = client.post("/session/claim")
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["score"] == 1250 + data["score_delta"]
    assert len(data["path"]) == 4

    snapshot = client.get("/session").json()
    assert snapshot["active_path"] == [{"lat": 37.77, "lng": -122.41}]
    assert len(snapshot["players"][0]["territory"]["paths"]) == 2

    geojson = client.get("/session/map").json()
    assert geojson["type"] == "FeatureCollection"
    territories = [f for f in geojson["features"] if f["properties"]["kind"] == "territory"]
    assert len(territories) == 5


def test_invalid_interaction_payload(client):
    _start(client)
    resp = client.post("/session/interaction", json={"lat": 123, "lng": 0})
    assert resp.status_code == 400


def test_set_color(client):
    resp = client.post("/session/color", json={"color": "#f3ff33"})
    assert resp.status_code == 200
    assert resp.json()["player"]["color"] == "#f3ff33"

    assert client.post("/session/color", json={"color": "#000000"}).status_code == 400
    assert client.post("/session/color", json={}).status_code == 400
    assert client.post("/session/color", json={"color": 5}).status_code == 400


def test_place_search_and_select(client):
    data = client.get("/places", params={"q": "golden"}).json()
    assert data["candidates"][0]["label"].startswith("Golden Gate Park")

    candidate = data["candidates"][0]
    resp = client.post("/places/select", json=candidate)
    assert resp.status_code == 200

    snapshot = client.get("/session").json()
    assert snapshot["location_label"] == candidate["label"]
    assert snapshot["active_path"] == [candidate["coordinate"]]


def test_place_select_without_coordinate(client):
    resp = client.post("/places/select", json={"label": "Nowhere"})
    assert resp.status_code == 409


def test_overlay_prediction(client):
    state.OVERLAY_PREDICTOR = StubPredictor()

    resp = client.post("/overlay/predict", json={})
    assert resp.status_code == 202
    request_id = resp.json()["request_id"]

    # TestClient runs background tasks before returning
    overlay = client.get("/overlay").json()
    assert overlay["image"] == OVERLAY_IMAGE
    assert overlay["request_id"] == request_id
    assert overlay["pending"] is False

    hidden = client.delete("/overlay").json()
    assert hidden["overlay"]["image"] is None


def test_overlay_failure_degrades(client):
    """No endpoint configured → overlay stays empty and a notification is queued"""
    resp = client.post("/overlay/predict", json={
        "bounds": {"south": 37.75, "west": -122.44, "north": 37.79, "east": -122.40}
    })
    assert resp.status_code == 202
    assert client.get("/overlay").json()["image"] is None

    notes = client.get("/session/notifications").json()["notifications"]
    assert notes[-1]["title"] == "Prediction Failed"
    assert notes[-1]["variant"] == "destructive"

    # Session still works afterwards
    _start(client)
    assert client.get("/").json()["location_set"] is True


def test_admin_reset(client):
    _start(client)
    client.post("/session/interaction", json={"lat": 37.78, "lng": -122.41})
    client.post("/session/interaction", json={"lat": 37.78, "lng": -122.40})
    client.post("/session/claim")

    resp = client.post("/admin/reset")
    assert resp.status_code == 200

    data = client.get("/api/leaderboard").json()
    assert data["players"][0]["score"] == 1250
    assert client.get("/session").json()["current_coordinate"] is None


def test_non_string_label_rejected(client):
    """A bad label is refused before the location moves; the session keeps serving"""
    _start(client)
    before = client.get("/session").json()

    resp = client.post("/session/location", json={"lat": 37.78, "lng": -122.40, "label": 5})
    assert resp.status_code == 400

    assert client.get("/session").json() == before
    assert client.get("/session/map").status_code == 200
    assert client.get("/overlay").status_code == 200

    resp = client.post("/places/select", json={"label": ["x"], "coordinate": {"lat": 37.78, "lng": -122.40}})
    assert resp.status_code == 400
    assert client.get("/session").json() == before


def test_place_reselect_restarts_path(client):
    _start(client)
    client.post("/session/interaction", json={"lat": 37.78, "lng": -122.41})

    resp = client.post("/places/select", json={
        "label": "Golden Gate Park, San Francisco",
        "coordinate": {"lat": 37.7694, "lng": -122.4862}
    })
    assert resp.status_code == 200

    snapshot = client.get("/session").json()
    assert snapshot["active_path"] == [{"lat": 37.7694, "lng": -122.4862}]
    assert snapshot["location_label"] == "Golden Gate Park, San Francisco"


class SlowPlaceLookup(PlaceLookup):
    """Blocks inside the lookup until the test releases it"""

    def __init__(self):
        super().__init__(PlaceParams())
        self.entered = threading.Event()
        self.released = threading.Event()
        self.released_in_time = None

    def _search(self, query):
        self.entered.set()
        self.released_in_time = self.released.wait(timeout=5)
        return []


def test_slow_place_lookup_does_not_block_interaction(client):
    _start(client)
    lookup = SlowPlaceLookup()
    state.PLACE_LOOKUP = lookup

    results = {}
    search = threading.Thread(target=lambda: results.update(resp=client.get("/places", params={"q": "golden"})))
    search.start()
    assert lookup.entered.wait(timeout=5)

    # Served while the lookup is still waiting
    resp = client.post("/session/interaction", json={"lat": 37.78, "lng": -122.41})
    lookup.released.set()
    search.join(timeout=10)

    assert resp.json()["accepted"] is True
    assert lookup.released_in_time is True
    assert results["resp"].status_code == 200
