"""HTTP API (FastAPI) exposing the photo → music pipeline."""
