"""Spotify client-credentials authentication with a shared token cache.

The access token is cached until shortly before it expires. Concurrent
pipeline runs share one TokenCache: when the token needs refreshing, only one
caller performs the token request while the others wait for its result.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

import requests

from moodsync.config import DEFAULT_TOKEN_REFRESH_MARGIN_SECONDS, Settings
from moodsync.core import MatchError, log_step

TokenFetcher = Callable[[], Dict]

# Lifetime assumed when the token endpoint omits expires_in
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


class TokenCache:
    """
    Bearer token cache keyed on expiry, with single-flight refresh.

    A token fetched with ``expires_in`` seconds of validity is considered
    expired ``refresh_margin`` seconds early.
    """

    def __init__(
        self,
        refresh_margin: int = DEFAULT_TOKEN_REFRESH_MARGIN_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.refresh_margin = refresh_margin
        self._clock = clock
        self._lock = threading.Lock()
        # (access_token, expires_at); replaced as a whole
        self._entry: Optional[Tuple[str, float]] = None

    def _valid_token(self) -> Optional[str]:
        entry = self._entry
        if entry is None:
            return None
        token, expires_at = entry
        if self._clock() < expires_at:
            return token
        return None

    def get(self, fetch: TokenFetcher) -> str:
        """
        Return the cached token, calling ``fetch`` once to refresh it if needed.

        ``fetch`` must return the token endpoint payload
        ({"access_token": ..., "expires_in": ...}).
        """
        token = self._valid_token()
        if token is not None:
            return token

        with self._lock:
            # Another caller may have refreshed while we were waiting.
            token = self._valid_token()
            if token is not None:
                return token

            token_info = fetch()
            token = token_info["access_token"]
            expires_in = float(
                token_info.get("expires_in", DEFAULT_TOKEN_LIFETIME_SECONDS)
            )
            self._entry = (token, self._clock() + expires_in - self.refresh_margin)
            return token

    def invalidate(self) -> None:
        with self._lock:
            self._entry = None


class SpotifyClientCredentials:
    """
    Token source for the Spotify Web API (client-credentials grant).
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        cache: Optional[TokenCache] = None,
    ):
        self.client_id = settings.spotify_client_id
        self.client_secret = settings.spotify_client_secret
        self.token_url = settings.spotify_token_url
        self.timeout = settings.request_timeout
        self.session = session or requests.Session()
        self.cache = cache or TokenCache(refresh_margin=settings.token_refresh_margin)

    def _request_token(self) -> Dict:
        log_step("Requesting Spotify access token (client credentials)...")
        try:
            r = self.session.post(
                self.token_url,
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise MatchError(f"Failed to authenticate with Spotify: {e}") from e

        if not r.ok:
            raise MatchError(
                f"Spotify auth failed: {r.status_code} {r.reason}"
            )

        try:
            token_info = r.json()
        except ValueError as e:
            raise MatchError("Spotify auth returned invalid JSON") from e

        if not isinstance(token_info, dict) or not token_info.get("access_token"):
            raise MatchError("Spotify auth response has no access_token")

        expires_in = token_info.get("expires_in", DEFAULT_TOKEN_LIFETIME_SECONDS)
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
            raise MatchError("Spotify auth response has no valid expires_in")
        return token_info

    def access_token(self) -> str:
        return self.cache.get(self._request_token)

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token()}"}
