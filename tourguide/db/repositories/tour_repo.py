"""
db/repositories/tour_repo.py
------------------------------
Persistence port for the saved-tours collection.

The contract is whole-collection only:
    load() -> list[Tour]    at startup
    save(list[Tour])        after every mutation

Adapters:
    InMemoryTourRepository  — process lifetime only (tests, ephemeral runs)
    JsonFileTourRepository  — one JSON array in a file, replaced atomically
    RedisTourRepository     — one JSON string under config.SAVED_TOURS_KEY
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

import redis

from tourguide import config
from tourguide.db.redis_client import get_json, get_redis, set_json
from tourguide.schemas.tour import Tour

logger = logging.getLogger(__name__)


class TourRepository(Protocol):
    def load(self) -> list[Tour]:
        ...

    def save(self, tours: list[Tour]) -> None:
        ...


def _decode(rows: list[dict] | None) -> list[Tour]:
    return [Tour.from_dict(row) for row in rows or []]


def _encode(tours: list[Tour]) -> list[dict]:
    return [t.to_dict() for t in tours]


class InMemoryTourRepository:
    """Keeps the encoded collection in memory; round-trips like the real stores."""

    def __init__(self, tours: list[Tour] | None = None):
        self._rows: list[dict] = _encode(tours or [])

    def load(self) -> list[Tour]:
        return _decode(self._rows)

    def save(self, tours: list[Tour]) -> None:
        self._rows = _encode(tours)


class JsonFileTourRepository:
    """Whole collection as a JSON array in a single file."""

    def __init__(self, path: Path | str = config.TOUR_STORAGE_PATH):
        self.path = Path(path)

    def load(self) -> list[Tour]:
        """
        Saved tours from the file; [] when it does not exist yet.

        A file that is not a JSON array of tours is moved aside to
        <name>.corrupt and the collection starts empty.
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as fh:
                rows = json.load(fh)
            if not isinstance(rows, list):
                raise ValueError(f"expected a JSON array, got {type(rows).__name__}")
            return _decode(rows)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            backup = self.path.with_name(self.path.name + ".corrupt")
            os.replace(self.path, backup)
            logger.error(
                "Saved tours in %s are unreadable (%s); moved to %s, starting empty",
                self.path, exc, backup,
            )
            return []

    def save(self, tours: list[Tour]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(_encode(tours), fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except Exception:
            os.unlink(tmp)
            raise


class RedisTourRepository:
    """Whole collection as one JSON string in Redis."""

    def __init__(self, key: str = config.SAVED_TOURS_KEY, client: redis.Redis | None = None):
        self.key    = key
        self.client = client

    def load(self) -> list[Tour]:
        return _decode(get_json(self.key, self.client or get_redis()))

    def save(self, tours: list[Tour]) -> None:
        set_json(self.key, _encode(tours), self.client or get_redis())


def build_tour_repository(backend: str | None = None) -> TourRepository:
    """Repository for config.TOUR_STORAGE_BACKEND ("memory" | "json" | "redis")."""
    backend = (backend or config.TOUR_STORAGE_BACKEND).lower()
    logger.info("Saved-tour storage backend: %s", backend)
    if backend == "memory":
        return InMemoryTourRepository()
    if backend == "json":
        return JsonFileTourRepository()
    if backend == "redis":
        return RedisTourRepository()
    raise ValueError(f"Unknown TOUR_STORAGE_BACKEND {backend!r}")
