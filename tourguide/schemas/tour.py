"""
schemas/tour.py
---------------
Dataclass definitions for the output tour structures.

  TourStop — one sight in a tour, with its 1-based order and the leg to the
             next stop (both leg fields None for the final stop)
  Tour     — ordered stops plus aggregates

Aggregates (total_distance, estimated_duration) are properties derived from
the stop sequence, so they can never drift from it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from tourguide.schemas.sight import Sight


@dataclass(frozen=True)
class TourStop:
    """A sight at a fixed position in a tour."""
    sight: Sight
    order: int
    distance_to_next: Optional[float] = None       # km
    walking_time_to_next: Optional[int] = None     # minutes, for the tour's transport mode

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.sight.to_dict(),
            "order":                self.order,
            "distance_to_next":     self.distance_to_next,
            "walking_time_to_next": self.walking_time_to_next,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TourStop":
        return cls(
            sight=Sight.from_dict(data),
            order=int(data["order"]),
            distance_to_next=data.get("distance_to_next"),
            walking_time_to_next=data.get("walking_time_to_next"),
        )


@dataclass(frozen=True)
class Tour:
    """
    Top-level output of tour generation.

    dwell_minutes is the per-stop visit allotment used for
    estimated_duration; it is fixed when the tour is assembled.
    """
    id: str
    name: str
    stops: tuple[TourStop, ...] = ()
    dwell_minutes: int = 15
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_distance(self) -> float:
        """Sum of inter-stop distances in km (no return leg)."""
        return sum(s.distance_to_next or 0.0 for s in self.stops)

    @property
    def travel_minutes(self) -> int:
        return sum(s.walking_time_to_next or 0 for s in self.stops)

    @property
    def estimated_duration(self) -> int:
        """Travel time plus dwell time at every stop, in minutes."""
        return self.travel_minutes + len(self.stops) * self.dwell_minutes

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":                 self.id,
            "name":               self.name,
            "sights":             [s.to_dict() for s in self.stops],
            "dwell_minutes":      self.dwell_minutes,
            "total_distance":     self.total_distance,
            "estimated_duration": self.estimated_duration,
            "created_at":         self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tour":
        """Inverse of to_dict(); stored aggregates are ignored and recomputed."""
        stops = sorted(
            (TourStop.from_dict(s) for s in data.get("sights", [])),
            key=lambda s: s.order,
        )
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            stops=tuple(stops),
            dwell_minutes=int(data.get("dwell_minutes", 15)),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
