"""
api/routes/tours.py
--------------------
Tour generation and saved-tour management.

POST   /v1/tours/generate
GET    /v1/tours/current
DELETE /v1/tours/current
GET    /v1/tours/saved
POST   /v1/tours/saved
POST   /v1/tours/saved/{tour_id}/load
DELETE /v1/tours/saved/{tour_id}
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from tourguide.api.deps import get_store
from tourguide.api.routes._common import OriginIn, parse_sights
from tourguide.errors import TourGenerationError
from tourguide.schemas.settings import (
    DetailLevel,
    SightTier,
    TourType,
    TourWizardSettings,
    TransportMode,
    UserSettings,
)
from tourguide.stores.tour_store import TourStore

router = APIRouter()


# ── Request schemas ────────────────────────────────────────────────────────────

class WizardIn(BaseModel):
    number_of_days:         int = Field(1, ge=1)
    daily_duration_hours:   float = Field(2, ge=1)
    max_length_km:          float = Field(5, ge=0)
    transport_mode:         TransportMode = TransportMode.WALK
    interest_level:         list[SightTier] = Field(
        default_factory=lambda: [SightTier.TOP, SightTier.POPULAR], min_length=1,
    )
    tour_type:              TourType = TourType.ROUND_TRIP
    detail_level_per_sight: DetailLevel = DetailLevel.MEDIUM

    def to_settings(self) -> TourWizardSettings:
        return TourWizardSettings(**self.model_dump())


class GenerateRequest(BaseModel):
    origin:            OriginIn
    max_distance_km:   float = Field(..., ge=0, description="Distance budget in km")
    sights:            list[dict[str, Any]] = Field(default_factory=list)
    wizard:            Optional[WizardIn] = None
    user_name:         Optional[str] = Field(None, description="Overrides the configured user name")
    special_interests: Optional[str] = Field(None, description="Overrides the configured interests")

    def to_user_settings(self, base: UserSettings) -> UserSettings:
        """base with this request's user_name / special_interests applied."""
        overrides = {}
        if self.user_name is not None:
            overrides["user_name"] = self.user_name
        if self.special_interests is not None:
            overrides["special_interests"] = self.special_interests
        return replace(base, **overrides)


class SaveRequest(BaseModel):
    name: str = Field("", description="Empty keeps the generated name")


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/generate", summary="Generate a tour from candidate sights")
def generate_tour(req: GenerateRequest, store: TourStore = Depends(get_store)) -> dict:
    sights = parse_sights(req.sights, req.origin)
    settings = req.wizard.to_settings() if req.wizard else None
    try:
        tour = store.generate_tour(
            (req.origin.latitude, req.origin.longitude),
            req.max_distance_km,
            sights,
            settings,
            req.to_user_settings(store.settings),
        )
    except TourGenerationError as exc:
        raise HTTPException(status_code=422, detail={"code": exc.code, "message": str(exc)}) from exc
    return tour.to_dict()


@router.get("/current", summary="Current tour")
def current_tour(store: TourStore = Depends(get_store)) -> dict:
    if store.current_tour is None:
        raise HTTPException(status_code=404, detail="No current tour. Call /v1/tours/generate first.")
    return store.current_tour.to_dict()


@router.delete("/current", summary="Clear the current tour")
def clear_tour(store: TourStore = Depends(get_store)) -> dict:
    store.clear_tour()
    return {"cleared": True}


@router.get("/saved", summary="List saved tours")
def saved_tours(store: TourStore = Depends(get_store)) -> list[dict]:
    return [t.to_dict() for t in store.saved_tours]


@router.post("/saved", summary="Save the current tour")
def save_tour(req: SaveRequest, store: TourStore = Depends(get_store)) -> dict:
    tour = store.save_tour(req.name)
    if tour is None:
        raise HTTPException(status_code=404, detail="No current tour to save.")
    return tour.to_dict()


@router.post("/saved/{tour_id}/load", summary="Make a saved tour current")
def load_tour(tour_id: str, store: TourStore = Depends(get_store)) -> dict:
    tour = store.load_tour(tour_id)
    if tour is None:
        raise HTTPException(status_code=404, detail=f"Saved tour '{tour_id}' not found.")
    return tour.to_dict()


@router.delete("/saved/{tour_id}", summary="Delete a saved tour")
def delete_tour(tour_id: str, store: TourStore = Depends(get_store)) -> dict:
    if not store.delete_tour(tour_id):
        raise HTTPException(status_code=404, detail=f"Saved tour '{tour_id}' not found.")
    return {"deleted": tour_id}
