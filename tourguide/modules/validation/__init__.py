"""
modules/validation package — data quality guards where external sight data
enters the planner.
"""
from tourguide.modules.validation.ingestion_validator import (
    ValidationResult,
    validate_sight,
    filter_valid,
)

__all__ = [
    "ValidationResult",
    "validate_sight",
    "filter_valid",
]
