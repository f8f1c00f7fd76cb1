"""
modules/planning/llm_route_planner.py
---------------------------------------
LLM-assisted route planner with mandatory heuristic fallback.

Flow:
  1. Build a natural-language prompt from the candidates (name, category,
     distance), the budget, the origin, wizard settings and user settings.
  2. Ask the completion client for a comma-separated list of sight names.
  3. Map each returned name to a candidate via a NameMatcher; unmatched
     names and repeat matches are dropped (first occurrence wins).
  4. Fewer than LLM_MIN_ROUTE_STOPS matched → append up to LLM_TOP_UP_LIMIT
     of the nearest unused candidates.
  5. Nothing usable, or any error on the way → NearestNeighborPlanner.

plan() never raises; failures are logged and absorbed.
"""

from __future__ import annotations
import logging
from typing import Optional, Protocol, Sequence

from tourguide import config
from tourguide.llm import CompletionClient
from tourguide.schemas.settings import TourType, TourWizardSettings, TransportMode, UserSettings
from tourguide.schemas.sight import Location, Sight
from tourguide.modules.planning.candidate_filter import nearest_first
from tourguide.modules.planning.route_planner import NearestNeighborPlanner, RoutePlanner

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert tour guide and route optimizer. Provide concise, practical "
    "tour routes that consider user preferences and distance constraints."
)


# ── Name matching ─────────────────────────────────────────────────────────────

class NameMatcher(Protocol):
    def match(self, name: str, candidates: Sequence[Sight]) -> Optional[Sight]:
        """Return the candidate a returned name refers to, or None."""
        ...


class SubstringNameMatcher:
    """
    Case-insensitive containment in either direction; the first candidate
    in input order wins.
    """

    def match(self, name: str, candidates: Sequence[Sight]) -> Optional[Sight]:
        needle = name.strip().lower()
        if not needle:
            return None
        for sight in candidates:
            hay = sight.name.lower()
            if needle in hay or hay in needle:
                return sight
        return None


def parse_route(
    completion: str,
    candidates: Sequence[Sight],
    matcher: NameMatcher,
) -> list[Sight]:
    """Comma-separated names → matched candidates, de-duplicated by id."""
    route: list[Sight] = []
    seen: set = set()
    for name in completion.split(","):
        sight = matcher.match(name, candidates)
        if sight is not None and sight.id not in seen:
            route.append(sight)
            seen.add(sight.id)
    return route


# ── Prompt ────────────────────────────────────────────────────────────────────

def build_prompt(
    origin: Location,
    candidates: Sequence[Sight],
    max_distance_km: float,
    settings: Optional[TourWizardSettings] = None,
    user: Optional[UserSettings] = None,
    max_stops: int = config.MAX_TOUR_STOPS,
) -> str:
    descriptions = ", ".join(
        f"{s.name} ({s.category}) - {s.distance}km away" for s in candidates
    )
    prompt = (
        f"You are a tour planner. Given these sights: {descriptions}, and a maximum "
        f"total distance of {max_distance_km}km, create an optimized tour route starting "
        f"and ending near location ({origin.latitude}, {origin.longitude})."
    )

    if settings is not None:
        prompt += (
            f" Tour requirements: {settings.number_of_days} day(s), "
            f"{settings.daily_duration_hours} hours per day, "
            f"transport mode: {settings.transport_mode.value}, "
            f"tour type: {settings.tour_type.value}."
        )

    if user is not None and user.special_interests.strip():
        prompt += (
            f" The user is particularly interested in: {user.special_interests.strip()}. "
            f"Prioritize sights that match these interests."
        )
    if user is not None and user.user_name.strip():
        prompt += f" The user's name is {user.user_name.strip()}."

    transport = settings.transport_mode if settings else TransportMode.WALK
    tour_type = settings.tour_type if settings else TourType.ROUND_TRIP
    prompt += (
        "\n\nConsider:\n"
        f"- Total distance should not exceed {max_distance_km}km\n"
        f"- Transport mode: {transport.value}\n"
        f"- Tour type: {tour_type.value}\n"
        "- Minimize backtracking and create an efficient route\n"
        "- Group nearby attractions together\n"
        "- Create a logical flow between different types of sights\n"
        "- Prioritize user interests when available\n"
        f"- Limit to maximum {max_stops} stops for a good experience\n\n"
        "Return only the sight names in the optimal visiting order, separated by commas. "
        "Do not include explanations or additional text."
    )
    return prompt


# ── Planner ───────────────────────────────────────────────────────────────────

class LLMRoutePlanner(RoutePlanner):
    """Delegates ordering to a completion client; falls back to the heuristic."""

    def __init__(
        self,
        client: CompletionClient,
        fallback: RoutePlanner | None = None,
        matcher: NameMatcher | None = None,
        user: UserSettings | None = None,
        min_route_stops: int = config.LLM_MIN_ROUTE_STOPS,
        top_up_limit: int = config.LLM_TOP_UP_LIMIT,
    ):
        self.client          = client
        self.fallback        = fallback or NearestNeighborPlanner()
        self.matcher         = matcher or SubstringNameMatcher()
        self.user            = user
        self.min_route_stops = min_route_stops
        self.top_up_limit    = top_up_limit

    def plan(
        self,
        origin: Location,
        candidates: Sequence[Sight],
        max_distance_km: float,
        settings: Optional[TourWizardSettings] = None,
    ) -> list[Sight]:
        try:
            route = self._plan_with_llm(origin, candidates, max_distance_km, settings)
        except Exception as exc:
            logger.warning("LLM route planning failed, using nearest-neighbour: %s", exc)
            return self.fallback.plan(origin, candidates, max_distance_km, settings)

        if not route:
            logger.info("LLM route planning produced no stops, using nearest-neighbour")
            return self.fallback.plan(origin, candidates, max_distance_km, settings)
        return route

    def _plan_with_llm(
        self,
        origin: Location,
        candidates: Sequence[Sight],
        max_distance_km: float,
        settings: Optional[TourWizardSettings],
    ) -> list[Sight]:
        prompt = build_prompt(origin, candidates, max_distance_km, settings, self.user)
        completion = self.client.complete(prompt, system=SYSTEM_PROMPT)
        route = parse_route(completion, candidates, self.matcher)
        logger.debug("LLM returned %r → %d matched stop(s)", completion, len(route))

        if len(route) < self.min_route_stops:
            used = {s.id for s in route}
            remaining = nearest_first(s for s in candidates if s.id not in used)
            route.extend(remaining[: self.top_up_limit])
        return route
