"""
schemas/sight.py
----------------
Point-of-interest record consumed by the tour planner.

A Sight is created at fetch time by the places adapter (or from a raw dict
at the API boundary), enriched with a tier and a distance from the user,
and never mutated afterwards. Use with_distance_from() to get a copy
measured from another origin.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, NamedTuple, Optional, Union

from tourguide.schemas.settings import DetailLevel, Language, SightTier
from tourguide.modules.tool_usage.distance_tool import haversine_km
from tourguide.modules.planning.tier_classifier import classify_tier

SightId = Union[int, str]


class Location(NamedTuple):
    """A WGS84 coordinate pair in degrees."""
    latitude: float
    longitude: float


DEFAULT_IMAGE_URL = (
    "https://images.unsplash.com/photo-1469474968028-56623f02e42e"
    "?q=80&w=2070&auto=format&fit=crop"
)
DEFAULT_DESCRIPTION_EN = "A notable attraction in the area"
DEFAULT_DESCRIPTION_DE = "Eine bemerkenswerte Attraktion in der Gegend"


@dataclass(frozen=True)
class Sight:
    """
    A discoverable place with location, category and descriptive content.

    distance is in km from whatever origin the caller measured against;
    None until computed. rating is 0–5, user_ratings_total is a review
    count and open_now is the provider's "currently open" flag; all three
    are optional and default to None.
    """
    id: SightId
    name: str
    category: str
    latitude: float
    longitude: float
    tier: SightTier = SightTier.POPULAR
    distance: Optional[float] = None
    image_url: str = DEFAULT_IMAGE_URL
    year_built: Optional[int] = None
    brief_description: str = ""
    full_description: str = ""
    brief_description_de: str = ""
    full_description_de: str = ""
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    open_now: Optional[bool] = None
    place_id: Optional[str] = None

    def with_distance_from(self, latitude: float, longitude: float) -> "Sight":
        """Copy of this sight with distance measured from (latitude, longitude)."""
        km = haversine_km(latitude, longitude, self.latitude, self.longitude)
        return replace(self, distance=round(km, 1))

    def description(self, language: Language = Language.EN,
                    length: DetailLevel = DetailLevel.MEDIUM) -> str:
        """Static narration text used when no generated content is available."""
        brief = DetailLevel(length) == DetailLevel.BRIEF
        if Language(language) == Language.DE:
            return self.brief_description_de if brief else self.full_description_de
        return self.brief_description if brief else self.full_description

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":                   self.id,
            "name":                 self.name,
            "category":             self.category,
            "latitude":             self.latitude,
            "longitude":            self.longitude,
            "tier":                 int(self.tier),
            "distance":             self.distance,
            "image_url":            self.image_url,
            "year_built":           self.year_built,
            "brief_description":    self.brief_description,
            "full_description":     self.full_description,
            "brief_description_de": self.brief_description_de,
            "full_description_de":  self.full_description_de,
            "rating":               self.rating,
            "user_ratings_total":   self.user_ratings_total,
            "open_now":             self.open_now,
            "place_id":             self.place_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sight":
        """
        Build a Sight from a raw record, applying defaults for optional fields.

        When no tier is given it is derived from rating + user_ratings_total.
        Run validate_sight() on untrusted input first.
        """
        rating = data.get("rating")
        reviews = data.get("user_ratings_total")
        rating = float(rating) if rating is not None else None
        reviews = int(reviews) if reviews is not None else None
        tier = data.get("tier")
        tier = SightTier(int(tier)) if tier is not None else classify_tier(rating, reviews)
        distance = data.get("distance")
        year_built = data.get("year_built")
        return cls(
            id=data["id"],
            name=str(data["name"]),
            category=str(data.get("category") or "Attraction"),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            tier=tier,
            distance=float(distance) if distance is not None else None,
            image_url=data.get("image_url") or DEFAULT_IMAGE_URL,
            year_built=int(year_built) if year_built is not None else None,
            brief_description=data.get("brief_description") or "",
            full_description=data.get("full_description") or "",
            brief_description_de=data.get("brief_description_de") or "",
            full_description_de=data.get("full_description_de") or "",
            rating=rating,
            user_ratings_total=reviews,
            open_now=data.get("open_now"),
            place_id=data.get("place_id"),
        )
