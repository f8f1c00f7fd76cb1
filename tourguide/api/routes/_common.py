"""
api/routes/_common.py
----------------------
Request fragments and boundary validation shared by the routers.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from tourguide.schemas.sight import Sight
from tourguide.modules.validation import validate_sight


class OriginIn(BaseModel):
    latitude:  float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


def parse_sights(records: list[dict[str, Any]], origin: Optional[OriginIn] = None) -> list[Sight]:
    """
    Validate raw sight records and build Sight objects.

    Any invalid record rejects the whole request with 422. Records without a
    distance get one computed from origin when an origin is given.
    """
    errors: list[dict[str, Any]] = []
    for index, record in enumerate(records):
        result = validate_sight(record)
        if not result.valid:
            errors.append({"index": index, "errors": result.errors})
    if errors:
        raise HTTPException(status_code=422, detail={"invalid_sights": errors})

    sights = [Sight.from_dict(r) for r in records]
    if origin is not None:
        sights = [
            s if s.distance is not None else s.with_distance_from(origin.latitude, origin.longitude)
            for s in sights
        ]
    return sights
