"""FastAPI routes exercised through TestClient with in-memory singletons."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FIXED_NOW, ScriptedClient
from tourguide.api.deps import get_narration_tool, get_places_tool, get_store
from tourguide.api.server import app
from tourguide.modules.tool_usage.narration_tool import NarrationTool
from tourguide.modules.tool_usage.places_tool import PlacesError
from tourguide.schemas.settings import UserSettings
from tourguide.schemas.sight import Sight
from tourguide.db.repositories.tour_repo import InMemoryTourRepository
from tourguide.stores.tour_store import TourStore

ORIGIN = {"latitude": 0.0, "longitude": 0.0}


def _raw_sights():
    return [
        {"id": "bridge", "name": "Old Bridge", "latitude": 0.0, "longitude": 0.004,
         "rating": 4.8, "user_ratings_total": 3200},
        {"id": "church", "name": "St. Mary's Church", "latitude": 0.003, "longitude": 0.006,
         "rating": 4.5, "user_ratings_total": 900},
        {"id": "museum", "name": "City Museum", "latitude": 0.0, "longitude": 0.010,
         "rating": 4.1, "user_ratings_total": 300},
        {"id": "kiosk", "name": "Corner Kiosk", "latitude": 0.001, "longitude": 0.001,
         "rating": 3.2, "user_ratings_total": 12},
    ]


class FakePlaces:
    def __init__(self, sights=None, error=None):
        self.sights = sights or []
        self.error = error

    def fetch_nearby(self, latitude, longitude, radius_km, language):
        if self.error:
            raise self.error
        return self.sights


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_narration_tool] = lambda: NarrationTool()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    res = client.get("/v1/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_generate_tour(client, store):
    res = client.post("/v1/tours/generate", json={
        "origin": ORIGIN,
        "max_distance_km": 5,
        "sights": _raw_sights(),
        "wizard": {"interest_level": [1], "transport_mode": "taxi", "number_of_days": 2},
    })
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "2-Day Taxi Tour"
    assert [s["id"] for s in body["sights"]] == ["bridge", "church"]
    assert [s["order"] for s in body["sights"]] == [1, 2]
    assert body["sights"][0]["distance"] == 0.4
    assert body["estimated_duration"] == body["sights"][0]["walking_time_to_next"] + 2 * 15
    assert store.current_tour.id == body["id"]


def test_generate_rejects_invalid_sight(client):
    sights = _raw_sights() + [{"id": "bad", "name": "Nowhere", "latitude": 123, "longitude": 0}]
    res = client.post("/v1/tours/generate", json={"origin": ORIGIN, "max_distance_km": 5, "sights": sights})
    assert res.status_code == 422
    assert res.json()["detail"]["invalid_sights"][0]["index"] == 4


def test_generate_rejects_invalid_wizard(client):
    res = client.post("/v1/tours/generate", json={
        "origin": ORIGIN, "max_distance_km": 5, "sights": _raw_sights(),
        "wizard": {"interest_level": []},
    })
    assert res.status_code == 422


def test_generate_no_matching_sights(client, store):
    res = client.post("/v1/tours/generate", json={
        "origin": ORIGIN, "max_distance_km": 0.01, "sights": _raw_sights(),
    })
    assert res.status_code == 422
    assert res.json()["detail"]["code"] == "ERROR_NO_MATCHING_SIGHTS"
    assert store.is_generating is False


def test_saved_tour_lifecycle(client):
    assert client.get("/v1/tours/current").status_code == 404
    assert client.post("/v1/tours/saved", json={"name": "X"}).status_code == 404

    tour = client.post("/v1/tours/generate", json={
        "origin": ORIGIN, "max_distance_km": 5, "sights": _raw_sights(),
    }).json()

    saved = client.post("/v1/tours/saved", json={"name": "X"}).json()
    assert saved["id"] == tour["id"]
    assert [t["name"] for t in client.get("/v1/tours/saved").json()] == ["X"]

    assert client.delete("/v1/tours/current").json() == {"cleared": True}
    assert client.get("/v1/tours/current").status_code == 404

    loaded = client.post(f"/v1/tours/saved/{tour['id']}/load").json()
    assert loaded["name"] == "X"
    assert loaded["sights"] == tour["sights"]
    assert client.get("/v1/tours/current").json()["name"] == "X"

    assert client.delete(f"/v1/tours/saved/{tour['id']}").status_code == 200
    assert client.delete(f"/v1/tours/saved/{tour['id']}").status_code == 404
    assert client.post(f"/v1/tours/saved/{tour['id']}/load").status_code == 404


def test_filter_sights_by_tier_and_radius(client):
    res = client.post("/v1/sights/filter", json={
        "sights": _raw_sights(), "origin": ORIGIN, "tiers": [1, 3], "radius_km": 0.5,
    })
    assert res.status_code == 200
    assert [s["id"] for s in res.json()] == ["bridge", "kiosk"]


def test_filter_sights_by_viewport(client):
    res = client.post("/v1/sights/filter", json={
        "sights": _raw_sights(),
        "viewport": {"latitude": 0.0, "longitude": 0.005, "latitude_delta": 0.008, "longitude_delta": 0.004},
    })
    assert [s["id"] for s in res.json()] == ["bridge", "church"]


def test_narration_without_llm_uses_static_text(client):
    sight = dict(_raw_sights()[0], brief_description="A stone bridge.", full_description="Long story.")
    res = client.post("/v1/sights/narration", json={"sight": sight, "length": "brief"})
    assert res.status_code == 200
    assert res.json()["content"] == "A stone bridge."


def test_nearby_sights(client):
    sight = Sight(id="p1", name="Fountain", category="Landmark", latitude=0.0, longitude=0.001, distance=0.1)
    app.dependency_overrides[get_places_tool] = lambda: FakePlaces([sight])
    res = client.get("/v1/sights/nearby", params={"latitude": 0, "longitude": 0})
    assert res.status_code == 200
    assert res.json()[0]["name"] == "Fountain"


def test_nearby_sights_upstream_error(client):
    app.dependency_overrides[get_places_tool] = lambda: FakePlaces(error=PlacesError("REQUEST_DENIED"))
    res = client.get("/v1/sights/nearby", params={"latitude": 0, "longitude": 0})
    assert res.status_code == 502


def test_generate_passes_user_name_and_interests_to_the_planner(client, events):
    completion = ScriptedClient("City Museum, Old Bridge, St. Mary's Church")
    settings = UserSettings(llm_api_key="sk-test", user_name="Default", special_interests="food")
    store = TourStore(InMemoryTourRepository(), completion_client=completion,
                      settings=settings, event_logger=events, clock=lambda: FIXED_NOW)
    app.dependency_overrides[get_store] = lambda: store

    res = client.post("/v1/tours/generate", json={
        "origin": ORIGIN, "max_distance_km": 5, "sights": _raw_sights(),
        "user_name": "Sam", "special_interests": "bridges",
    })
    assert res.status_code == 200
    assert [s["id"] for s in res.json()["sights"]] == ["museum", "bridge", "church"]
    assert "Sam" in completion.prompts[0]
    assert "bridges" in completion.prompts[0]
    assert "food" not in completion.prompts[0]
    assert store.settings.user_name == "Default"

    client.post("/v1/tours/generate", json={"origin": ORIGIN, "max_distance_km": 5, "sights": _raw_sights()})
    assert "Default" in completion.prompts[1]
    assert "food" in completion.prompts[1]


def test_narration_defaults_follow_user_settings(client):
    settings = UserSettings(language="DE", audio_length="brief")
    app.dependency_overrides[get_narration_tool] = lambda: NarrationTool(settings=settings)
    sight = dict(_raw_sights()[0], brief_description_de="Eine Steinbrücke.")
    res = client.post("/v1/sights/narration", json={"sight": sight})
    assert res.json() == {"sight_id": "bridge", "language": "DE", "length": "brief",
                          "content": "Eine Steinbrücke."}
