"""
db/redis_client.py
-------------------
redis-py client — singleton plus helpers for the saved-tours key.

Key schema:

  tourguide:saved_tours   (config.SAVED_TOURS_KEY)
       Type : String (JSON array of Tour.to_dict() objects)
       TTL  : none — saved tours live until deleted by the user

Environment variables (set in config.py):
    REDIS_HOST        default: localhost
    REDIS_PORT        default: 6379
    REDIS_DB          default: 0
    REDIS_PASSWORD    default: ""  (empty = no auth)
    SAVED_TOURS_KEY   default: tourguide:saved_tours
"""

from __future__ import annotations

import json
from typing import Any

import redis

from tourguide import config

# Module-level singleton; initialised lazily on first call to get_redis()
_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return the singleton Redis client, creating it on first call."""
    global _client
    if _client is None:
        kwargs: dict[str, Any] = {
            "host":             config.REDIS_HOST,
            "port":             config.REDIS_PORT,
            "db":               config.REDIS_DB,
            "decode_responses": True,   # return str, not bytes
        }
        if config.REDIS_PASSWORD:
            kwargs["password"] = config.REDIS_PASSWORD
        _client = redis.Redis(**kwargs)
    return _client


def get_json(key: str, client: redis.Redis | None = None) -> Any | None:
    """Decode the JSON value stored at key; None on a missing key."""
    raw = (client or get_redis()).get(key)
    return json.loads(raw) if raw is not None else None


def set_json(key: str, value: Any, client: redis.Redis | None = None) -> None:
    """Replace the value at key with its JSON encoding (single SET)."""
    (client or get_redis()).set(key, json.dumps(value, ensure_ascii=False))
