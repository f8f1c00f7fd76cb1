"""
modules/validation/ingestion_validator.py
------------------------------------------
Data-quality guards applied to raw sight records before they become Sight
objects (places-search results, API request bodies, stored tours).

  Sight:
    ✓ id present (int or non-empty str)
    ✓ Non-empty name
    ✓ latitude / longitude numeric, in [-90, 90] / [-180, 180]
    ✓ distance ≥ 0 if present
    ✓ rating in [0, 5] if present
    ✓ user_ratings_total a non-negative integer if present
    ✓ tier in {1, 2, 3} if present

Usage:
    from tourguide.modules.validation import validate_sight, filter_valid

    result = validate_sight(raw)
    if not result.valid:
        print(result.errors)

    clean_records = filter_valid(records, validate_sight)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        record: The input record dict (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    record: dict = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        return self.valid


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ── Sight validation ───────────────────────────────────────────────────────────

def validate_sight(record: dict[str, Any]) -> ValidationResult:
    """Validate a raw sight record; see module docstring for the checks."""
    errors: list[str] = []

    # ── Identity ───────────────────────────────────────────────────────────
    sight_id = record.get("id")
    if sight_id is None or isinstance(sight_id, bool) or not isinstance(sight_id, (int, str)):
        errors.append(f"id must be an int or str (got {sight_id!r})")
    elif isinstance(sight_id, str) and not sight_id.strip():
        errors.append("id must not be an empty string")

    name = record.get("name", "")
    if not name or not str(name).strip():
        errors.append("name must not be empty or NULL")

    # ── Coordinates ────────────────────────────────────────────────────────
    lat = _as_float(record.get("latitude"))
    lon = _as_float(record.get("longitude"))
    if lat is None or lon is None:
        errors.append(
            f"latitude/longitude must be numeric "
            f"(got lat={record.get('latitude')!r}, lon={record.get('longitude')!r})"
        )
    else:
        if not (-90.0 <= lat <= 90.0):
            errors.append(f"latitude={lat} is outside valid range [-90, 90]")
        if not (-180.0 <= lon <= 180.0):
            errors.append(f"longitude={lon} is outside valid range [-180, 180]")

    # ── Optional fields ────────────────────────────────────────────────────
    if record.get("distance") is not None:
        distance = _as_float(record["distance"])
        if distance is None or distance < 0:
            errors.append(f"distance={record['distance']!r} must be a number >= 0")

    if record.get("rating") is not None:
        rating = _as_float(record["rating"])
        if rating is None or not (0.0 <= rating <= 5.0):
            errors.append(f"rating={record['rating']!r} is outside valid range [0, 5]")

    reviews = record.get("user_ratings_total")
    if reviews is not None:
        if isinstance(reviews, bool) or not isinstance(reviews, int) or reviews < 0:
            errors.append(f"user_ratings_total={reviews!r} must be a non-negative integer")

    tier = record.get("tier")
    if tier is not None and (isinstance(tier, bool) or tier not in (1, 2, 3)):
        errors.append(f"tier={tier!r} must be one of 1, 2, 3")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


# ── Batch helper ───────────────────────────────────────────────────────────────

def filter_valid(
    items: list[T],
    validator: Callable[[dict], ValidationResult],
    to_dict: Callable[[T], dict] | None = None,
) -> list[T]:
    """
    Apply a validator to every item in a list, return only the valid ones.

    Rejected records are logged at WARNING level with their errors.
    """
    valid_items: list[T] = []
    for item in items:
        record_dict = to_dict(item) if to_dict is not None else item
        result = validator(record_dict)  # type: ignore[arg-type]
        if result.valid:
            valid_items.append(item)
        else:
            logger.warning(
                "Rejected record %r: %s",
                record_dict.get("name", "?") if isinstance(record_dict, dict) else record_dict,
                "; ".join(result.errors),
            )
    return valid_items
