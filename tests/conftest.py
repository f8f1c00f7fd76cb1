"""
Shared fixtures and builders for the tour guide tests.

All coordinates sit on or near the equator so that 0.009 degrees of
longitude is roughly 1 km.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tourguide.schemas.settings import SightTier
from tourguide.schemas.sight import Sight
from tourguide.modules.observability.logger import StructuredLogger
from tourguide.db.repositories.tour_repo import InMemoryTourRepository
from tourguide.stores.tour_store import TourStore

ORIGIN = (0.0, 0.0)
FIXED_NOW = datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)


def make_sight(
    sight_id,
    lat: float,
    lon: float,
    tier: int = 2,
    name: str | None = None,
    category: str = "Landmark",
    origin: tuple[float, float] = ORIGIN,
) -> Sight:
    sight = Sight(
        id=sight_id,
        name=name or f"Sight {sight_id}",
        category=category,
        latitude=lat,
        longitude=lon,
        tier=SightTier(tier),
        brief_description=f"Brief {sight_id}",
        full_description=f"Full {sight_id}",
        brief_description_de=f"Kurz {sight_id}",
        full_description_de=f"Lang {sight_id}",
    )
    return sight.with_distance_from(*origin)


class RaisingClient:
    """Completion client whose every call fails."""

    def __init__(self):
        self.calls = 0

    def complete(self, prompt: str, system: str = "") -> str:
        self.calls += 1
        raise RuntimeError("completion service unreachable")


class ScriptedClient:
    """Completion client returning a fixed completion and recording prompts."""

    def __init__(self, completion: str):
        self.completion = completion
        self.prompts: list[str] = []

    def complete(self, prompt: str, system: str = "") -> str:
        self.prompts.append(prompt)
        return self.completion


@pytest.fixture
def events(tmp_path):
    logger = StructuredLogger(tmp_path / "logs")
    yield logger
    logger.close()


@pytest.fixture
def store(events):
    return TourStore(
        repository=InMemoryTourRepository(),
        event_logger=events,
        clock=lambda: FIXED_NOW,
    )
