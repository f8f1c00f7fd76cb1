"""
api/routes/sights.py
---------------------
Candidate discovery helpers for the map and list screens.

GET  /v1/sights/nearby      Google Places nearby search
POST /v1/sights/filter      tier + radius / viewport filtering
POST /v1/sights/narration   narration text for one sight
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from tourguide import config
from tourguide.api.deps import get_narration_tool, get_places_tool
from tourguide.api.routes._common import OriginIn, parse_sights
from tourguide.schemas.settings import DetailLevel, Language, SightTier
from tourguide.modules.planning.candidate_filter import Viewport, filter_candidates
from tourguide.modules.tool_usage.narration_tool import NarrationTool
from tourguide.modules.tool_usage.places_tool import PlacesError, PlacesTool

router = APIRouter()


class ViewportIn(BaseModel):
    latitude:        float = Field(..., ge=-90, le=90)
    longitude:       float = Field(..., ge=-180, le=180)
    latitude_delta:  float = Field(..., ge=0)
    longitude_delta: float = Field(..., ge=0)


class FilterRequest(BaseModel):
    sights:    list[dict[str, Any]] = Field(default_factory=list)
    origin:    Optional[OriginIn] = None
    tiers:     Optional[list[SightTier]] = None
    radius_km: Optional[float] = Field(None, ge=0)
    viewport:  Optional[ViewportIn] = None


class NarrationRequest(BaseModel):
    sight:     dict[str, Any]
    language:  Optional[Language] = None       # None: user settings default
    length:    Optional[DetailLevel] = None
    interests: Optional[str] = None


@router.get("/nearby", summary="Nearby tourist attractions")
def nearby(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(config.PLACES_SEARCH_RADIUS_KM, gt=0),
    language: Language = Language.EN,
    places: PlacesTool = Depends(get_places_tool),
) -> list[dict]:
    try:
        sights = places.fetch_nearby(latitude, longitude, radius_km, language)
    except PlacesError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return [s.to_dict() for s in sights]


@router.post("/filter", summary="Filter candidate sights")
def filter_sights(req: FilterRequest) -> list[dict]:
    sights = parse_sights(req.sights, req.origin)
    viewport = Viewport(**req.viewport.model_dump()) if req.viewport else None
    filtered = filter_candidates(sights, tiers=req.tiers, radius_km=req.radius_km, viewport=viewport)
    return [s.to_dict() for s in filtered]


@router.post("/narration", summary="Narration text for a sight")
def narration(
    req: NarrationRequest,
    tool: NarrationTool = Depends(get_narration_tool),
) -> dict:
    sight = parse_sights([req.sight])[0]
    language, length, interests = tool.resolve(req.language, req.length, req.interests)
    content = tool.generate(sight, language, length, interests)
    return {"sight_id": sight.id, "language": language.value,
            "length": length.value, "content": content}
