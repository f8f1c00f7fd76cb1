"""
modules/planning/route_planner.py
-----------------------------------
Single-tour route planner: nearest-neighbour sequencing with a distance
budget.

Architecture:
  - RoutePlanner:           abstract interface shared with the LLM planner
  - NearestNeighborPlanner: greedy heuristic, always available, no I/O

Algorithm:
  1. ≤ 1 candidate → returned unchanged.
  2. The candidate nearest to the origin is always taken first.
  3. Repeatedly take the nearest unvisited candidate to the current stop,
     until every candidate is visited, MAX_TOUR_STOPS is reached, or

         walked + leg + RETURN_LEG_WEIGHT × back_to_origin
             > BUDGET_SLACK_FACTOR × budget

     in which case that candidate is not added and planning stops.

Ties for "nearest" go to the earliest candidate in input order.
Point-to-point tours are planned exactly like round trips.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from tourguide import config
from tourguide.schemas.settings import TourWizardSettings
from tourguide.schemas.sight import Location, Sight
from tourguide.modules.tool_usage.distance_tool import haversine_km


def _nearest(location: Location, candidates: Sequence[Sight]) -> tuple[Sight, float]:
    """First candidate at minimum distance from location, and that distance."""
    best = candidates[0]
    best_km = haversine_km(location.latitude, location.longitude, best.latitude, best.longitude)
    for sight in candidates[1:]:
        km = haversine_km(location.latitude, location.longitude, sight.latitude, sight.longitude)
        if km < best_km:
            best, best_km = sight, km
    return best, best_km


class RoutePlanner(ABC):
    """Chooses and orders the stops of a tour from a candidate set."""

    @abstractmethod
    def plan(
        self,
        origin: Location,
        candidates: Sequence[Sight],
        max_distance_km: float,
        settings: Optional[TourWizardSettings] = None,
    ) -> list[Sight]:
        """Return an ordered subsequence of candidates (possibly empty)."""
        ...


class NearestNeighborPlanner(RoutePlanner):
    """Greedy nearest-neighbour sequencer with a budget stopping rule."""

    def __init__(
        self,
        max_stops: int = config.MAX_TOUR_STOPS,
        slack_factor: float = config.BUDGET_SLACK_FACTOR,
        return_leg_weight: float = config.RETURN_LEG_WEIGHT,
    ):
        self.max_stops         = max_stops
        self.slack_factor      = slack_factor
        self.return_leg_weight = return_leg_weight

    def plan(
        self,
        origin: Location,
        candidates: Sequence[Sight],
        max_distance_km: float,
        settings: Optional[TourWizardSettings] = None,
    ) -> list[Sight]:
        if len(candidates) <= 1:
            return list(candidates)

        limit_km = self.slack_factor * max_distance_km

        first, _ = _nearest(origin, candidates)
        route: list[Sight] = [first]
        visited: set = {first.id}
        current = Location(first.latitude, first.longitude)
        walked_km = 0.0

        while len(route) < len(candidates) and len(route) < self.max_stops:
            unvisited = [s for s in candidates if s.id not in visited]
            if not unvisited:
                break

            nxt, leg_km = _nearest(current, unvisited)
            back_km = haversine_km(nxt.latitude, nxt.longitude, origin.latitude, origin.longitude)
            if walked_km + leg_km + self.return_leg_weight * back_km > limit_km:
                break

            route.append(nxt)
            visited.add(nxt.id)
            current = Location(nxt.latitude, nxt.longitude)
            walked_km += leg_km

        return route
