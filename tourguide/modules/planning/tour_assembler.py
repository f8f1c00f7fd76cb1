"""
modules/planning/tour_assembler.py
------------------------------------
Turns an ordered route into a Tour.

Per stop:
  order                 1-based position in the route
  distance_to_next      Haversine km to the next stop (None for the last)
  walking_time_to_next  ceil(km × minutes_per_km(transport_mode)) (None for the last)

Per tour:
  total_distance     Σ distance_to_next
  estimated_duration Σ walking_time_to_next + stops × dwell_minutes(detail_level)

Without wizard settings the walking rate and medium dwell time are used and
the tour is named "<N>-Stop Tour".

Tour ids are the creation time in epoch milliseconds. An id already issued by
this assembler, or listed in taken_ids, is bumped to the next free value so
tours built within the same millisecond never collide.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Callable, Collection, Optional, Sequence

from tourguide.schemas.settings import TourWizardSettings
from tourguide.schemas.sight import Sight
from tourguide.schemas.tour import Tour, TourStop
from tourguide.modules.tool_usage.distance_tool import DistanceTool, dwell_minutes


def tour_name(stop_count: int, settings: Optional[TourWizardSettings] = None) -> str:
    if settings is None:
        return f"{stop_count}-Stop Tour"
    mode = settings.transport_mode.value
    return f"{settings.number_of_days}-Day {mode[:1].upper()}{mode[1:]} Tour"


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


class TourAssembler:
    """Computes per-stop legs and wraps them in a Tour."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self.clock = clock or _default_clock
        self._last_id: Optional[int] = None

    def _issue_id(self, created_at: datetime, taken_ids: Collection[str]) -> str:
        candidate = int(created_at.timestamp() * 1000)
        if self._last_id is not None:
            candidate = max(candidate, self._last_id + 1)
        while str(candidate) in taken_ids:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def assemble(
        self,
        route: Sequence[Sight],
        settings: Optional[TourWizardSettings] = None,
        name: Optional[str] = None,
        taken_ids: Collection[str] = (),
    ) -> Tour:
        mode = settings.transport_mode if settings else None
        level = settings.detail_level_per_sight if settings else None
        distance_tool = DistanceTool(mode)

        stops: list[TourStop] = []
        for index, sight in enumerate(route):
            km: Optional[float] = None
            minutes: Optional[int] = None
            if index + 1 < len(route):
                nxt = route[index + 1]
                km = distance_tool.calculate(
                    sight.latitude, sight.longitude, nxt.latitude, nxt.longitude,
                )
                minutes = distance_tool.travel_time_minutes(
                    sight.latitude, sight.longitude, nxt.latitude, nxt.longitude,
                )
            stops.append(TourStop(
                sight=sight,
                order=index + 1,
                distance_to_next=km,
                walking_time_to_next=minutes,
            ))

        created_at = self.clock()
        return Tour(
            id=self._issue_id(created_at, taken_ids),
            name=name or tour_name(len(stops), settings),
            stops=tuple(stops),
            dwell_minutes=dwell_minutes(level),
            created_at=created_at,
        )
