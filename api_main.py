"""ASGI entrypoint exposing the FastAPI app."""

from moodsync.api.fastapi_app import app

__all__ = ["app"]
