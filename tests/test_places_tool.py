"""Google Places nearby search mapping."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from tourguide.schemas.settings import Language, SightTier
from tourguide.schemas.sight import DEFAULT_DESCRIPTION_DE, DEFAULT_IMAGE_URL
from tourguide.modules.tool_usage.places_tool import (
    PlacesError,
    PlacesTool,
    format_category,
    sight_from_place,
)

ORIGIN = (52.5200, 13.4050)


def _place(place_id, name, lat, lng, **extra):
    place = {
        "place_id": place_id,
        "name": name,
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "types": ["tourist_attraction", "point_of_interest"],
    }
    place.update(extra)
    return place


def _session(payload, status=200):
    response = MagicMock()
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status}")
    session = MagicMock()
    session.get.return_value = response
    return session


def test_format_category():
    assert format_category("tourist_attraction") == "Tourist Attraction"
    assert format_category("museum") == "Museum"
    assert format_category(None) == "Attraction"


def test_sight_from_place_maps_fields():
    place = _place(
        "gate", "Brandenburg Gate", 52.5163, 13.3777,
        rating=4.7, user_ratings_total=180000,
        vicinity="Pariser Platz",
        opening_hours={"open_now": True},
        photos=[{"photo_reference": "ref123"}],
    )
    record = sight_from_place(place, *ORIGIN, api_key="k")
    assert record["id"] == "gate"
    assert record["category"] == "Tourist Attraction"
    assert record["tier"] == int(SightTier.TOP)
    assert record["open_now"] is True
    assert record["distance"] == 1.9
    assert record["brief_description"] == "Pariser Platz"
    assert "photo_reference=ref123" in record["image_url"]


def test_sight_from_place_defaults():
    place = {"name": "Quiet Courtyard", "geometry": {"location": {"lat": 52.52, "lng": 13.41}}}
    record = sight_from_place(place, *ORIGIN, index=4)
    assert record["id"] == "place_4"
    assert record["category"] == "Attraction"
    assert record["tier"] == int(SightTier.POPULAR)
    assert record["image_url"] == DEFAULT_IMAGE_URL
    assert record["full_description_de"] == DEFAULT_DESCRIPTION_DE
    assert record["open_now"] is None


def test_fetch_nearby_sorts_and_validates():
    payload = {
        "status": "OK",
        "results": [
            _place("far", "Victory Column", 52.5145, 13.3501, rating=4.6, user_ratings_total=60000),
            _place("near", "Red Town Hall", 52.5186, 13.4081, rating=4.3, user_ratings_total=40),
            {"place_id": "broken", "name": "", "geometry": {"location": {"lat": 52.5, "lng": 13.4}}},
        ],
    }
    session = _session(payload)
    tool = PlacesTool(api_key="k", session=session)
    sights = tool.fetch_nearby(*ORIGIN, radius_km=80, language=Language.DE)

    assert [s.id for s in sights] == ["near", "far"]
    assert sights[0].tier == SightTier.NICHE
    assert sights[1].tier == SightTier.TOP

    _, kwargs = session.get.call_args
    assert kwargs["params"]["radius"] == 50_000
    assert kwargs["params"]["language"] == "de"
    assert kwargs["params"]["type"] == "tourist_attraction"


def test_fetch_nearby_error_status():
    tool = PlacesTool(api_key="k", session=_session({"status": "REQUEST_DENIED", "error_message": "bad key"}))
    with pytest.raises(PlacesError, match="REQUEST_DENIED"):
        tool.fetch_nearby(*ORIGIN)


def test_fetch_nearby_http_error():
    tool = PlacesTool(api_key="k", session=_session({}, status=500))
    with pytest.raises(PlacesError):
        tool.fetch_nearby(*ORIGIN)


def test_fetch_nearby_requires_key():
    with pytest.raises(PlacesError):
        PlacesTool(api_key="").fetch_nearby(*ORIGIN)


def test_zero_results_is_empty():
    tool = PlacesTool(api_key="k", session=_session({"status": "ZERO_RESULTS", "results": []}))
    assert tool.fetch_nearby(*ORIGIN) == []
