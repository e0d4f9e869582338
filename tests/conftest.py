from typing import Any, Callable, Dict, List, Optional

import pytest

from moodsync.config import Settings


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload: Any = None, status_code: int = 200, reason: str = "OK"):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


Handler = Callable[..., FakeResponse]


class FakeSession:
    """
    Stand-in for requests.Session.

    Handlers are looked up by (method, url suffix); each call is recorded in
    ``calls`` as (method, url, kwargs). A handler may raise to simulate a
    network error.
    """

    def __init__(self, routes: Optional[Dict[tuple, Handler]] = None):
        self.routes: Dict[tuple, Handler] = dict(routes or {})
        self.calls: List[tuple] = []

    def _dispatch(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        for (route_method, suffix), handler in self.routes.items():
            if route_method == method and url.endswith(suffix):
                return handler(url, **kwargs)
        return FakeResponse({"error": "not found"}, status_code=404, reason="Not Found")

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self._dispatch("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> FakeResponse:
        return self._dispatch("POST", url, **kwargs)

    def count(self, method: str, suffix: str) -> int:
        return sum(1 for m, url, _ in self.calls if m == method and url.endswith(suffix))


def make_track_item(track_id: str, name: Optional[str] = None) -> Dict[str, Any]:
    """Spotify track object as returned by /search."""
    return {
        "id": track_id,
        "name": name or f"Track {track_id}",
        "artists": [{"name": "Test Artist"}, {"name": "Guest"}],
        "album": {
            "name": "Test Album",
            "images": [{"url": f"https://img.test/{track_id}.jpg", "height": 640, "width": 640}],
        },
        "preview_url": None,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "duration_ms": 183_500,
    }


def token_response(url: str, **kwargs) -> FakeResponse:
    return FakeResponse({"access_token": "tok-1", "token_type": "Bearer", "expires_in": 3600})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        huggingface_api_token="hf-test-token",
        spotify_client_id="client-id",
        spotify_client_secret="client-secret",
        vision_model_url="https://vision.test/models/places365",
        gemini_api_key="gemini-test-key",
        image_tagging_url="https://tagging.test/models/gemini:generateContent",
        spotify_token_url="https://accounts.test/api/token",
        spotify_api_base="https://api.test/v1",
        request_timeout=5.0,
    )


def tagging_response(text: str) -> FakeResponse:
    """generateContent answer carrying ``text`` as the first candidate."""
    return FakeResponse({"candidates": [{"content": {"parts": [{"text": text}]}}]})
