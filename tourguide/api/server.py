"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    uvicorn tourguide.api.server:app --reload --port 8000

Endpoints:
    GET    /v1/health
    POST   /v1/tours/generate
    GET    /v1/tours/current
    DELETE /v1/tours/current
    GET    /v1/tours/saved
    POST   /v1/tours/saved
    POST   /v1/tours/saved/{tour_id}/load
    DELETE /v1/tours/saved/{tour_id}
    GET    /v1/sights/nearby
    POST   /v1/sights/filter
    POST   /v1/sights/narration
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourguide.api.routes import health, sights, tours

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="Tour Guide API",
    version="1.0.0",
    description=(
        "Nearby sight discovery, narration and budgeted walking-tour generation. "
        "Integrates Google Places and an optional LLM route planner."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the mobile / web client (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/v1",        tags=["Health"])
app.include_router(tours.router,  prefix="/v1/tours",  tags=["Tours"])
app.include_router(sights.router, prefix="/v1/sights", tags=["Sights"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tourguide.api.server:app", host="0.0.0.0", port=8000, reload=True)
