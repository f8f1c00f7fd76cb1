"""api/ — FastAPI surface over the tour store."""
