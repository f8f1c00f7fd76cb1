"""
modules/planning/tier_classifier.py
-------------------------------------
Maps a sight's popularity signal (rating, review count) to a SightTier.

Rules are checked in priority order:
  1. rating or review count missing        → tier 2
  2. rating ≥ 4.3 and reviews ≥ 500        → tier 1
  3. rating < 4.0 or reviews < 50          → tier 3
  4. otherwise                             → tier 2
"""

from __future__ import annotations
from typing import Optional

from tourguide.schemas.settings import SightTier

_TOP_MIN_RATING:   float = 4.3
_TOP_MIN_REVIEWS:  int   = 500
_NICHE_MAX_RATING: float = 4.0    # exclusive
_NICHE_MAX_REVIEWS: int  = 50     # exclusive


def classify_tier(
    rating: Optional[float] = None,
    user_ratings_total: Optional[int] = None,
) -> SightTier:
    """Return the tier for a sight's rating and review count."""
    if rating is None or user_ratings_total is None:
        return SightTier.POPULAR
    if rating >= _TOP_MIN_RATING and user_ratings_total >= _TOP_MIN_REVIEWS:
        return SightTier.TOP
    if rating < _NICHE_MAX_RATING or user_ratings_total < _NICHE_MAX_REVIEWS:
        return SightTier.NICHE
    return SightTier.POPULAR
