"""
modules/tool_usage/places_tool.py
-----------------------------------
Fetches nearby tourist attractions from the Google Places Nearby Search API
and maps them into Sight records.

Real API:  GET https://maps.googleapis.com/maps/api/place/nearbysearch/json
Auth:      key= query parameter (config.GOOGLE_PLACES_API_KEY)

Each result gets a distance from the search origin (rounded to 0.1 km) and a
tier from its rating + user_ratings_total. Results are returned nearest
first.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

import requests

from tourguide import config
from tourguide.schemas.settings import Language
from tourguide.schemas.sight import (
    DEFAULT_DESCRIPTION_DE,
    DEFAULT_DESCRIPTION_EN,
    DEFAULT_IMAGE_URL,
    Sight,
)
from tourguide.modules.planning.candidate_filter import nearest_first
from tourguide.modules.planning.tier_classifier import classify_tier
from tourguide.modules.tool_usage.distance_tool import haversine_km
from tourguide.modules.validation import filter_valid, validate_sight

logger = logging.getLogger(__name__)

PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"

_MIN_RADIUS_M = 100
_MAX_RADIUS_M = 50_000      # Nearby Search hard limit
_OK_STATUSES = {"OK", "ZERO_RESULTS"}


class PlacesError(RuntimeError):
    """Places request failed or the API reported an error status."""


def format_category(place_type: Optional[str]) -> str:
    """'tourist_attraction' → 'Tourist Attraction'."""
    if not place_type:
        return "Attraction"
    return " ".join(word.capitalize() for word in place_type.split("_"))


def sight_from_place(
    place: dict[str, Any],
    origin_lat: float,
    origin_lon: float,
    index: int = 0,
    api_key: str = "",
) -> dict[str, Any]:
    """Map one Nearby Search result into a raw sight record (see Sight.from_dict)."""
    location = place.get("geometry", {}).get("location", {})
    lat, lon = location.get("lat"), location.get("lng")
    distance = None
    if lat is not None and lon is not None:
        distance = round(haversine_km(origin_lat, origin_lon, lat, lon), 1)

    rating = place.get("rating")
    reviews = place.get("user_ratings_total")
    photos = place.get("photos") or []
    image_url = DEFAULT_IMAGE_URL
    if photos and photos[0].get("photo_reference"):
        image_url = (
            f"{PHOTO_URL}?maxwidth=400&photo_reference={photos[0]['photo_reference']}"
            f"&key={api_key}"
        )
    vicinity = place.get("vicinity")
    types = place.get("types") or []

    return {
        "id":                   place.get("place_id") or f"place_{index}",
        "name":                 place.get("name", ""),
        "category":             format_category(types[0] if types else None),
        "latitude":             lat,
        "longitude":            lon,
        "distance":             distance,
        "image_url":            image_url,
        "brief_description":    vicinity or DEFAULT_DESCRIPTION_EN,
        "full_description":     vicinity or DEFAULT_DESCRIPTION_EN,
        "brief_description_de": vicinity or DEFAULT_DESCRIPTION_DE,
        "full_description_de":  vicinity or DEFAULT_DESCRIPTION_DE,
        "rating":               rating,
        "user_ratings_total":   reviews,
        "open_now":             (place.get("opening_hours") or {}).get("open_now"),
        "place_id":             place.get("place_id"),
        "tier":                 int(classify_tier(rating, reviews)),
    }


class PlacesTool:
    """Thin wrapper around Google Places Nearby Search."""

    def __init__(
        self,
        api_key: str = config.GOOGLE_PLACES_API_KEY,
        session: Optional[requests.Session] = None,
        timeout: int = config.PLACES_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float = config.PLACES_SEARCH_RADIUS_KM,
        language: Language = Language.EN,
    ) -> list[Sight]:
        """Tourist attractions around (latitude, longitude), nearest first."""
        if not self.api_key:
            raise PlacesError("GOOGLE_PLACES_API_KEY is required for nearby search")

        radius_m = max(_MIN_RADIUS_M, min(_MAX_RADIUS_M, round(radius_km * 1000)))
        params = {
            "location": f"{latitude},{longitude}",
            "radius":   radius_m,
            "type":     "tourist_attraction",
            "language": "de" if Language(language) == Language.DE else "en",
            "key":      self.api_key,
        }
        try:
            res = self.session.get(config.GOOGLE_PLACES_NEARBY_URL, params=params, timeout=self.timeout)
            res.raise_for_status()
            data = res.json()
        except (requests.RequestException, ValueError) as exc:
            raise PlacesError(f"Nearby search failed: {exc}") from exc

        status = data.get("status")
        if status not in _OK_STATUSES:
            raise PlacesError(
                f"Google Places API error: {status} - {data.get('error_message', 'Unknown error')}"
            )

        records = [
            sight_from_place(place, latitude, longitude, index, self.api_key)
            for index, place in enumerate(data.get("results") or [])
        ]
        sights = [Sight.from_dict(r) for r in filter_valid(records, validate_sight)]
        logger.info("Nearby search returned %d sight(s) within %dm", len(sights), radius_m)
        return nearest_first(sights)
