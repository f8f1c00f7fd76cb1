"""
api/deps.py
-----------
Process-wide singletons handed to routes through FastAPI Depends(), so tests
can swap them with app.dependency_overrides.

The store and the narration tool share one UserSettings built from config.
"""
from __future__ import annotations

from tourguide import config
from tourguide.db import build_tour_repository
from tourguide.llm import build_completion_client
from tourguide.schemas.settings import UserSettings
from tourguide.stores.tour_store import TourStore
from tourguide.modules.tool_usage.narration_tool import NarrationTool
from tourguide.modules.tool_usage.places_tool import PlacesTool

_settings: UserSettings | None = None
_store: TourStore | None = None
_places: PlacesTool | None = None
_narration: NarrationTool | None = None


def get_user_settings() -> UserSettings:
    global _settings
    if _settings is None:
        _settings = UserSettings(llm_api_key=config.LLM_API_KEY)
    return _settings


def get_store() -> TourStore:
    global _store
    if _store is None:
        _store = TourStore(repository=build_tour_repository(), settings=get_user_settings())
    return _store


def get_places_tool() -> PlacesTool:
    global _places
    if _places is None:
        _places = PlacesTool()
    return _places


def get_narration_tool() -> NarrationTool:
    global _narration
    if _narration is None:
        settings = get_user_settings()
        _narration = NarrationTool(
            client=build_completion_client(settings.llm_api_key),
            settings=settings,
        )
    return _narration
