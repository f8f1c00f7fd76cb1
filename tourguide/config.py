"""
config.py
---------
Central configuration for the tour guide backend.
All secrets loaded from environment variables — never hard-coded.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the package directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.
_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=True)

# ── LLM (delegated route optimizer + narration) ──────────────────────────────
# An empty LLM_API_KEY disables every LLM path; the heuristic planner and the
# static sight descriptions are used instead.
LLM_PROVIDER: str   = os.getenv("LLM_PROVIDER", "http")               # "http" | "google"
LLM_API_KEY: str    = os.getenv("LLM_API_KEY", "")
LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gemini-1.5-flash")
LLM_COMPLETION_URL: str = os.getenv("LLM_COMPLETION_URL", "https://toolkit.rork.com/text/llm/")
LLM_REQUEST_TIMEOUT: int = int(os.getenv("LLM_REQUEST_TIMEOUT", "30"))
NARRATION_CACHE_SIZE: int = int(os.getenv("NARRATION_CACHE_SIZE", "256"))   # generated texts kept in memory

# ── Google Places API (nearby sight search) ──────────────────────────────────
GOOGLE_PLACES_API_KEY: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
GOOGLE_PLACES_NEARBY_URL: str = os.getenv(
    "GOOGLE_PLACES_NEARBY_URL",
    "https://maps.googleapis.com/maps/api/place/nearbysearch/json",
)
PLACES_SEARCH_RADIUS_KM: float = float(os.getenv("PLACES_SEARCH_RADIUS_KM", "10"))
PLACES_REQUEST_TIMEOUT: int = int(os.getenv("PLACES_REQUEST_TIMEOUT", "15"))

# ── Tour generation ──────────────────────────────────────────────────────────
MAX_TOUR_STOPS: int            = int(os.getenv("MAX_TOUR_STOPS", "8"))
BUDGET_SLACK_FACTOR: float     = float(os.getenv("BUDGET_SLACK_FACTOR", "0.9"))      # share of budget usable
RETURN_LEG_WEIGHT: float       = float(os.getenv("RETURN_LEG_WEIGHT", "0.5"))        # weight on distance back to origin
BUDGET_EXPANSION_FACTOR: float = float(os.getenv("BUDGET_EXPANSION_FACTOR", "1.5"))  # retry radius when nothing matches
DEFAULT_TOUR_DISTANCE_KM: float = float(os.getenv("DEFAULT_TOUR_DISTANCE_KM", "5"))

# Delegated (LLM) optimizer thresholds
LLM_MIN_CANDIDATES: int  = int(os.getenv("LLM_MIN_CANDIDATES", "3"))    # used only when count > this
LLM_MIN_ROUTE_STOPS: int = int(os.getenv("LLM_MIN_ROUTE_STOPS", "3"))   # fewer matched stops → top up
LLM_TOP_UP_LIMIT: int    = int(os.getenv("LLM_TOP_UP_LIMIT", "5"))      # max nearest sights added on top-up

# ── Saved-tour storage ───────────────────────────────────────────────────────
TOUR_STORAGE_BACKEND: str = os.getenv("TOUR_STORAGE_BACKEND", "json")   # "memory" | "json" | "redis"
TOUR_STORAGE_PATH: str    = os.getenv(
    "TOUR_STORAGE_PATH",
    str(Path(__file__).resolve().parents[1] / "data" / "saved_tours.json"),
)

# ── Redis ─────────────────────────────────────────────────────────────────────
REDIS_HOST: str     = os.getenv("REDIS_HOST",     "localhost")
REDIS_PORT: int     = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB: int       = int(os.getenv("REDIS_DB",   "0"))
REDIS_PASSWORD: str = os.getenv("REDIS_PASSWORD", "")
SAVED_TOURS_KEY: str = os.getenv("SAVED_TOURS_KEY", "tourguide:saved_tours")

# ── Observability ─────────────────────────────────────────────────────────────
LOGS_DIR: str = os.getenv("LOGS_DIR", str(Path(__file__).resolve().parents[1] / "logs"))
