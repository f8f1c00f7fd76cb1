"""
db/
----
Storage layer for saved tours.

  JSON file — default; config.TOUR_STORAGE_PATH
  Redis     — redis-py; one key, config.SAVED_TOURS_KEY
  memory    — tests and throwaway sessions

Public exports:
    from tourguide.db import build_tour_repository, get_redis
"""

from tourguide.db.redis_client import get_redis
from tourguide.db.repositories.tour_repo import (
    InMemoryTourRepository,
    JsonFileTourRepository,
    RedisTourRepository,
    TourRepository,
    build_tour_repository,
)

__all__ = [
    "get_redis",
    "InMemoryTourRepository",
    "JsonFileTourRepository",
    "RedisTourRepository",
    "TourRepository",
    "build_tour_repository",
]
