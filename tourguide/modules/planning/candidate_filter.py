"""
modules/planning/candidate_filter.py
--------------------------------------
Narrows a candidate sight list before route planning.

  filter_by_tiers     — keep sights whose tier is accepted
  filter_by_radius    — keep sights whose precomputed distance ≤ radius
  filter_by_viewport  — keep sights inside a map viewport's bounding box

Filters never mutate their input and preserve relative order. Sights with
no computed distance never pass the radius filter.

The viewport box is center ± span/2 on both axes in raw degrees. It does not
correct for longitude compression at high latitudes, so the box is wider in
km than it looks near the poles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from tourguide.schemas.settings import SightTier
from tourguide.schemas.sight import Sight


@dataclass(frozen=True)
class Viewport:
    """Map region: center point plus latitude/longitude span in degrees."""
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    def contains(self, latitude: float, longitude: float) -> bool:
        half_lat = self.latitude_delta / 2
        half_lon = self.longitude_delta / 2
        return (
            self.latitude - half_lat <= latitude <= self.latitude + half_lat
            and self.longitude - half_lon <= longitude <= self.longitude + half_lon
        )


def filter_by_tiers(sights: Iterable[Sight], tiers: Iterable[SightTier]) -> list[Sight]:
    accepted = {SightTier(t) for t in tiers}
    return [s for s in sights if s.tier in accepted]


def filter_by_radius(sights: Iterable[Sight], radius_km: float) -> list[Sight]:
    return [s for s in sights if s.distance is not None and s.distance <= radius_km]


def filter_by_viewport(sights: Iterable[Sight], viewport: Viewport) -> list[Sight]:
    return [s for s in sights if viewport.contains(s.latitude, s.longitude)]


def filter_candidates(
    sights: Sequence[Sight],
    tiers: Optional[Iterable[SightTier]] = None,
    radius_km: Optional[float] = None,
    viewport: Optional[Viewport] = None,
) -> list[Sight]:
    """Apply whichever filters are given: tiers first, then radius, then viewport."""
    result = list(sights)
    if tiers is not None:
        result = filter_by_tiers(result, tiers)
    if radius_km is not None:
        result = filter_by_radius(result, radius_km)
    if viewport is not None:
        result = filter_by_viewport(result, viewport)
    return result


def nearest_first(sights: Iterable[Sight]) -> list[Sight]:
    """Sights sorted by ascending distance (missing distance sorts as 0, stable)."""
    return sorted(sights, key=lambda s: s.distance or 0.0)
