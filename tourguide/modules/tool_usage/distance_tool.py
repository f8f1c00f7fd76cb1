"""
modules/tool_usage/distance_tool.py
-------------------------------------
Straight-line distance and travel-time helpers.

Distances use the Haversine formula on a spherical Earth (mean radius
6371 km). Travel time is a flat minutes-per-km rate per transport mode; no
road network is consulted.
"""

from __future__ import annotations
import math
from typing import Optional

from tourguide.schemas.settings import DetailLevel, TransportMode

# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

_EARTH_RADIUS_KM = 6371.0

# minutes per km
_MINUTES_PER_KM: dict[TransportMode, int] = {
    TransportMode.WALK:   12,
    TransportMode.TAXI:   3,
    TransportMode.PUBLIC: 6,
    TransportMode.MIX:    8,
}
_DEFAULT_MINUTES_PER_KM = 12

# minutes spent at each stop
_DWELL_MINUTES: dict[DetailLevel, int] = {
    DetailLevel.BRIEF:  5,
    DetailLevel.MEDIUM: 15,
    DetailLevel.EXPERT: 25,
}
_DEFAULT_DWELL_MINUTES = 15


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    # rounding can push a past 1.0 for antipodal points
    a = min(1.0, max(0.0, a))
    return 2 * r * math.asin(math.sqrt(a))


def minutes_per_km(mode: Optional[TransportMode]) -> int:
    """Travel-time rate for a transport mode; walking pace when unknown."""
    if mode is None:
        return _DEFAULT_MINUTES_PER_KM
    return _MINUTES_PER_KM.get(TransportMode(mode), _DEFAULT_MINUTES_PER_KM)


def dwell_minutes(level: Optional[DetailLevel]) -> int:
    """Time allotted per stop for a narration detail level."""
    if level is None:
        return _DEFAULT_DWELL_MINUTES
    return _DWELL_MINUTES.get(DetailLevel(level), _DEFAULT_DWELL_MINUTES)


def travel_minutes(km: float, mode: Optional[TransportMode] = None) -> int:
    """Straight-line km to whole minutes (rounded up) for a transport mode."""
    if km <= 0:
        return 0
    return math.ceil(km * minutes_per_km(mode))


# ---------------------------------------------------------------------------
# DistanceTool
# ---------------------------------------------------------------------------


class DistanceTool:
    """
    Computes distances and travel times between lat/lon points using the
    Haversine formula plus a per-mode minutes-per-km rate.
    No external HTTP calls are made.
    """

    def __init__(self, mode: Optional[TransportMode] = None) -> None:
        self.mode = mode

    def calculate(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Return Haversine distance in km."""
        return haversine_km(lat1, lon1, lat2, lon2)

    def travel_time_minutes(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        mode: Optional[TransportMode] = None,
    ) -> int:
        """Return travel time in whole minutes between two points."""
        if lat1 == lat2 and lon1 == lon2:
            return 0
        km = haversine_km(lat1, lon1, lat2, lon2)
        return travel_minutes(km, mode or self.mode)
