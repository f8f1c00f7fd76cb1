"""
stores/tour_store.py
---------------------
Owns the current tour and the saved-tours collection, and exposes the single
tour-generation entry point.

generate_tour() pipeline:
  1. Tier filter (wizard interest_level), then budget filter (distance ≤ max).
  2. Nothing left → retry the budget filter at BUDGET_EXPANSION_FACTOR × max.
     Still nothing → NoMatchingSightsError. Otherwise the closest
     MAX_TOUR_STOPS expanded candidates become the route as-is.
  3. Otherwise plan: LLMRoutePlanner when the user settings carry an LLM
     credential, a completion client is available and there are more than
     LLM_MIN_CANDIDATES candidates, else NearestNeighborPlanner.
  4. Empty route → EmptyRouteError.
  5. TourAssembler builds the Tour, which is published as current_tour. Its
     id never repeats one already issued or held by a saved tour.

is_generating is True for the whole call and cleared on every exit path.
current_tour only changes on success.

Saved tours go through a TourRepository: every save/delete rewrites the
whole collection.
"""

from __future__ import annotations
import logging
import time as _time_mod
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterator, Optional, Sequence

from tourguide import config
from tourguide.errors import EmptyRouteError, NoMatchingSightsError, TourGenerationError
from tourguide.llm import CompletionClient, build_completion_client
from tourguide.schemas.settings import TourWizardSettings, UserSettings
from tourguide.schemas.sight import Location, Sight
from tourguide.schemas.tour import Tour
from tourguide.db.repositories.tour_repo import TourRepository
from tourguide.modules.observability.logger import StructuredLogger
from tourguide.modules.planning.candidate_filter import (
    filter_by_radius,
    filter_by_tiers,
    nearest_first,
)
from tourguide.modules.planning.llm_route_planner import LLMRoutePlanner
from tourguide.modules.planning.route_planner import NearestNeighborPlanner, RoutePlanner
from tourguide.modules.planning.tour_assembler import TourAssembler

logger = logging.getLogger(__name__)

_EVENT_SESSION = "tours"


class TourStore:
    """In-memory tour state plus an injected persistence port."""

    def __init__(
        self,
        repository: TourRepository,
        completion_client: CompletionClient | None = None,
        settings: UserSettings | None = None,
        event_logger: StructuredLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = repository
        self.settings   = settings or UserSettings()
        self.completion_client = (
            completion_client
            if completion_client is not None
            else build_completion_client(self.settings.llm_api_key)
        )
        self.events     = event_logger or StructuredLogger()
        self.heuristic  = NearestNeighborPlanner()
        self.assembler  = TourAssembler(clock=clock)

        self.current_tour: Optional[Tour] = None
        self.saved_tours: list[Tour] = repository.load()
        self.is_generating: bool = False
        self.tour_distance: float = config.DEFAULT_TOUR_DISTANCE_KM

    # ── Generation ────────────────────────────────────────────────────────────

    @contextmanager
    def _generating(self) -> Iterator[None]:
        self.is_generating = True
        try:
            yield
        finally:
            self.is_generating = False

    def _select_planner(self, candidate_count: int, user: UserSettings) -> RoutePlanner:
        if (
            user.has_llm_credential
            and self.completion_client is not None
            and candidate_count > config.LLM_MIN_CANDIDATES
        ):
            return LLMRoutePlanner(
                client=self.completion_client,
                fallback=self.heuristic,
                user=user,
            )
        return self.heuristic

    def generate_tour(
        self,
        user_location: Location | tuple[float, float],
        max_distance: float,
        available_sights: Sequence[Sight],
        wizard_settings: TourWizardSettings | None = None,
        user_settings: UserSettings | None = None,
    ) -> Tour:
        """
        Build a tour from available_sights and publish it as current_tour.

        user_settings replaces the store's settings for this call only.

        Raises:
            NoMatchingSightsError: nothing within 1.5 × max_distance passes the filters.
            EmptyRouteError:       the planner returned no stops.
        """
        origin = Location(*user_location)
        with self._generating():
            t0 = _time_mod.perf_counter()
            logger.info(
                "Generating tour: max distance %skm, %d available sight(s)",
                max_distance, len(available_sights),
            )
            try:
                route = self._build_route(
                    origin, max_distance, available_sights, wizard_settings,
                    user_settings or self.settings,
                )
                tour = self.assembler.assemble(
                    route, wizard_settings, taken_ids={t.id for t in self.saved_tours},
                )
            except TourGenerationError as exc:
                logger.error("Error generating tour: %s", exc)
                self.events.log(_EVENT_SESSION, "TOUR_FAILED", {
                    "code": exc.code,
                    "max_distance_km": max_distance,
                    "available": len(available_sights),
                })
                raise

            self.current_tour = tour
            logger.info(
                "Generated tour: %d stops, %.1fkm total", len(tour.stops), tour.total_distance,
            )
            self.events.log(_EVENT_SESSION, "TOUR_GENERATED", {
                "tour_id": tour.id,
                "stops": len(tour.stops),
                "total_distance_km": round(tour.total_distance, 2),
                "estimated_duration_min": tour.estimated_duration,
            })
            self.events.log(_EVENT_SESSION, "PERFORMANCE", {
                "component": "TourStore.generate_tour",
                "duration_ms": round((_time_mod.perf_counter() - t0) * 1000, 2),
            })
            return tour

    def _build_route(
        self,
        origin: Location,
        max_distance: float,
        available_sights: Sequence[Sight],
        wizard_settings: TourWizardSettings | None,
        user: UserSettings,
    ) -> list[Sight]:
        candidates = list(available_sights)
        if wizard_settings is not None:
            candidates = filter_by_tiers(candidates, wizard_settings.interest_level)
            logger.info("Sights after tier filtering: %d", len(candidates))

        near = filter_by_radius(candidates, max_distance)
        logger.info("Sights within %skm: %d", max_distance, len(near))

        if not near:
            expanded_km = max_distance * config.BUDGET_EXPANSION_FACTOR
            expanded = filter_by_radius(candidates, expanded_km)
            if not expanded:
                raise NoMatchingSightsError(expanded_km)
            logger.info("Using %d sight(s) from expanded %skm radius", len(expanded), expanded_km)
            return nearest_first(expanded)[: config.MAX_TOUR_STOPS]

        planner = self._select_planner(len(near), user)
        route = planner.plan(origin, near, max_distance, wizard_settings)
        if not route:
            raise EmptyRouteError(len(near))
        return route

    # ── Current / saved tours ─────────────────────────────────────────────────

    def clear_tour(self) -> None:
        self.current_tour = None

    def set_tour_distance(self, distance_km: float) -> None:
        if distance_km < 0:
            raise ValueError(f"tour distance must be >= 0 (got {distance_km})")
        self.tour_distance = distance_km

    def save_tour(self, name: str = "") -> Optional[Tour]:
        """
        Save the current tour under name (empty keeps its name). A saved tour
        with the same id is replaced, otherwise the tour is appended.
        Returns the saved tour, or None when there is no current tour.
        """
        if self.current_tour is None:
            return None
        to_save = replace(self.current_tour, name=name.strip() or self.current_tour.name)

        tours = list(self.saved_tours)
        for index, tour in enumerate(tours):
            if tour.id == to_save.id:
                tours[index] = to_save
                break
        else:
            tours.append(to_save)

        self.repository.save(tours)
        self.saved_tours = tours
        return to_save

    def get_saved_tour(self, tour_id: str) -> Optional[Tour]:
        return next((t for t in self.saved_tours if t.id == tour_id), None)

    def load_tour(self, tour_id: str) -> Optional[Tour]:
        """Make a saved tour current; unknown ids leave current_tour unchanged."""
        tour = self.get_saved_tour(tour_id)
        if tour is not None:
            self.current_tour = tour
        return tour

    def delete_tour(self, tour_id: str) -> bool:
        """Remove a saved tour; returns False when the id is unknown."""
        tours = [t for t in self.saved_tours if t.id != tour_id]
        if len(tours) == len(self.saved_tours):
            return False
        self.repository.save(tours)
        self.saved_tours = tours
        return True
