"""
errors.py
---------
Failures surfaced to callers of TourStore.generate_tour().

Messages start with a machine-readable code (ERROR_...) followed by a
user-facing hint.
"""

from __future__ import annotations


class TourGenerationError(RuntimeError):
    """Base class for tour generation failures the UI must present."""
    code = "ERROR_TOUR_GENERATION"


class NoMatchingSightsError(TourGenerationError):
    """No candidate matched tiers + budget, even after the budget expansion."""
    code = "ERROR_NO_MATCHING_SIGHTS"

    def __init__(self, searched_km: float):
        self.searched_km = searched_km
        super().__init__(
            f"{self.code}: No sights found within {searched_km:g}km matching your "
            f"criteria. Try increasing your search radius or adjusting your tour settings."
        )


class EmptyRouteError(TourGenerationError):
    """Candidates existed but the planner produced no stops."""
    code = "ERROR_EMPTY_ROUTE"

    def __init__(self, candidate_count: int):
        self.candidate_count = candidate_count
        super().__init__(
            f"{self.code}: Could not create a tour from {candidate_count} sight(s). "
            f"Try increasing the tour distance or search radius."
        )
