"""
schemas/settings.py
-------------------
User-configurable inputs to tour generation.

  TourWizardSettings — constraint bundle gathered by the tour wizard
  UserSettings       — app-level settings (LLM credential, language, interests)

Both are read-only inputs for a single generate_tour() call.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class SightTier(IntEnum):
    """Coarse popularity tier: 1 = top, 2 = popular, 3 = niche."""
    TOP = 1
    POPULAR = 2
    NICHE = 3


class TransportMode(str, Enum):
    WALK = "walk"
    TAXI = "taxi"
    PUBLIC = "public"
    MIX = "mix"


class TourType(str, Enum):
    ROUND_TRIP = "round-trip"
    POINT_TO_POINT = "point-to-point"


class DetailLevel(str, Enum):
    """Narration length per stop; also drives dwell time."""
    BRIEF = "brief"
    MEDIUM = "medium"
    EXPERT = "expert"


class Language(str, Enum):
    EN = "EN"
    DE = "DE"


@dataclass
class TourWizardSettings:
    """
    Constraint bundle for one tour.

    Defaults match a fresh install: a single 2-hour walking round trip over
    5 km, covering tier 1 and tier 2 sights with medium-length narration.

    tour_type is carried through to the LLM prompt only; the heuristic
    planner treats point-to-point and round-trip the same way.
    """
    number_of_days:         int = 1
    daily_duration_hours:   float = 2
    max_length_km:          float = 5
    transport_mode:         TransportMode = TransportMode.WALK
    interest_level:         list[SightTier] = field(
        default_factory=lambda: [SightTier.TOP, SightTier.POPULAR]
    )
    tour_type:              TourType = TourType.ROUND_TRIP
    detail_level_per_sight: DetailLevel = DetailLevel.MEDIUM

    def __post_init__(self) -> None:
        if self.number_of_days < 1:
            raise ValueError(f"number_of_days must be >= 1 (got {self.number_of_days})")
        if self.daily_duration_hours < 1:
            raise ValueError(
                f"daily_duration_hours must be >= 1 (got {self.daily_duration_hours})"
            )
        if self.max_length_km < 0:
            raise ValueError(f"max_length_km must be >= 0 (got {self.max_length_km})")
        if not self.interest_level:
            raise ValueError("interest_level must contain at least one tier")
        # Enum constructors raise ValueError on unknown values
        self.transport_mode = TransportMode(self.transport_mode)
        self.tour_type = TourType(self.tour_type)
        self.detail_level_per_sight = DetailLevel(self.detail_level_per_sight)
        self.interest_level = [SightTier(t) for t in self.interest_level]

    def to_dict(self) -> dict[str, Any]:
        return {
            "number_of_days":         self.number_of_days,
            "daily_duration_hours":   self.daily_duration_hours,
            "max_length_km":          self.max_length_km,
            "transport_mode":         self.transport_mode.value,
            "interest_level":         [int(t) for t in self.interest_level],
            "tour_type":              self.tour_type.value,
            "detail_level_per_sight": self.detail_level_per_sight.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TourWizardSettings":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class UserSettings:
    """
    Per-user inputs read by the tour store and the narration tool.

    language and audio_length are the narration defaults. user_name and
    special_interests are woven into LLM prompts when non-blank.
    """
    llm_api_key:       str = ""
    user_name:         str = ""
    language:          Language = Language.EN
    special_interests: str = ""
    audio_length:      DetailLevel = DetailLevel.MEDIUM

    def __post_init__(self) -> None:
        self.language = Language(self.language)
        self.audio_length = DetailLevel(self.audio_length)

    @property
    def has_llm_credential(self) -> bool:
        return bool(self.llm_api_key.strip())
