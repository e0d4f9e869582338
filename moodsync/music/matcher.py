"""Mood → tracks matching against the Spotify Web API.

find_tracks() is the main entrypoint:
  1. get a bearer token (client credentials, cached in a TokenCache)
  2. search tracks with the mood's query template
  3. best effort: fetch audio features for the results in one batch call
  4. if features came back, re-rank tracks by closeness to the mood target

Step 3 is the only place where a failure is tolerated: without features the
catalog order is returned as-is.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from moodsync.config import Settings
from moodsync.core import (
    FeatureVector,
    MatchError,
    Mood,
    Track,
    log_info,
    log_step,
    log_success,
    log_warning,
)

from .auth import SpotifyClientCredentials, TokenCache
from .profiles import MoodProfile, build_tag_query, get_profile
from .ranking import rank_tracks

# Spotify caps search / recommendations page size at 50.
MAX_LIMIT = 50


def _clamp_limit(limit: int) -> int:
    return max(1, min(MAX_LIMIT, int(limit)))


def _track_from_item(item: Dict[str, Any], mood: Mood) -> Track:
    album = item.get("album")
    if not isinstance(album, dict):
        album = {}
    images = [i for i in album.get("images") or [] if isinstance(i, dict)]
    external_urls = item.get("external_urls")
    if not isinstance(external_urls, dict):
        external_urls = {}
    return Track(
        id=item["id"],
        title=item.get("name") or "",
        artists=tuple(
            a.get("name", "") for a in item.get("artists") or [] if isinstance(a, dict)
        ),
        duration_seconds=int(item.get("duration_ms") or 0) // 1000,
        external_url=external_urls.get("spotify", ""),
        artwork_url=images[0].get("url", "") if images else "",
        mood=mood,
        preview_url=item.get("preview_url"),
    )


def _parse_tracks(items: Any, mood: Mood, limit: int) -> List[Track]:
    tracks: List[Track] = []
    for item in items or []:
        if not isinstance(item, dict) or not item.get("id"):
            continue
        tracks.append(_track_from_item(item, mood))
    return tracks[:limit]


class MusicMatcher:
    """
    Finds tracks matching a mood.

    The TokenCache is injectable so that one cache can be shared by every
    matcher of the process (and replaced in tests).
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        token_cache: Optional[TokenCache] = None,
    ):
        self.api_base = settings.spotify_api_base.rstrip("/")
        self.market = settings.spotify_market
        self.timeout = settings.request_timeout
        self.session = session or requests.Session()
        self.auth = SpotifyClientCredentials(
            settings,
            session=self.session,
            cache=token_cache,
        )

    # ---------- HTTP ----------

    def _get(self, path: str, params: Dict[str, Any], headers: Dict[str, str]) -> Any:
        url = f"{self.api_base}/{path}"
        try:
            r = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise MatchError(f"Spotify {path} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise MatchError(f"Spotify {path} request failed: {e}") from e

        if r.status_code == 401:
            # Token revoked or expired early: the next call fetches a new one.
            self.auth.cache.invalidate()
        if not r.ok:
            raise MatchError(f"Spotify {path} failed: {r.status_code} {r.reason}")

        try:
            return r.json()
        except ValueError as e:
            raise MatchError(f"Spotify {path} returned invalid JSON") from e

    # ---------- Steps ----------

    def _search(
        self,
        query: str,
        mood: Mood,
        limit: int,
        headers: Dict[str, str],
    ) -> List[Track]:
        data = self._get(
            "search",
            {"q": query, "type": "track", "limit": limit, "market": self.market},
            headers,
        )
        if not isinstance(data, dict) or not isinstance(data.get("tracks"), dict):
            raise MatchError("Spotify search returned an unexpected payload")
        return _parse_tracks(data["tracks"].get("items"), mood, limit)

    def _fetch_features(
        self,
        tracks: Sequence[Track],
        headers: Dict[str, str],
    ) -> Optional[List[Optional[FeatureVector]]]:
        """
        Audio features aligned with ``tracks``, or None when unavailable.
        """
        try:
            data = self._get(
                "audio-features",
                {"ids": ",".join(t.id for t in tracks)},
                headers,
            )
        except MatchError as e:
            log_warning(f"Audio features unavailable, returning unranked tracks ({e})")
            return None

        entries = data.get("audio_features") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            log_warning("Audio features response is malformed, returning unranked tracks")
            return None

        by_id = {
            e["id"]: e for e in entries if isinstance(e, dict) and e.get("id")
        }
        if by_id:
            return [by_id.get(t.id) for t in tracks]
        return [e if isinstance(e, dict) else None for e in entries]

    def _rerank(
        self,
        tracks: List[Track],
        profile: MoodProfile,
        headers: Dict[str, str],
    ) -> List[Track]:
        if not tracks:
            return tracks
        features = self._fetch_features(tracks, headers)
        if features is None:
            return tracks
        return rank_tracks(tracks, features, profile.target)

    # ---------- Public API ----------

    def find_tracks(self, mood: Union[str, Mood], limit: int = 10) -> List[Track]:
        """
        Tracks matching ``mood``, best match first.

        Unknown moods use the neutral profile. Raises MatchError when
        authentication or the search itself fails.
        """
        profile = get_profile(mood)
        limit = _clamp_limit(limit)

        headers = self.auth.headers()

        log_step(f"Finding music for vibe: {profile.mood.value}...")
        tracks = self._search(profile.query, profile.mood, limit, headers)
        tracks = self._rerank(tracks, profile, headers)

        log_success(f"Found {len(tracks)} matching tracks")
        return tracks

    def _recommendations(
        self,
        profile: MoodProfile,
        limit: int,
        headers: Dict[str, str],
    ) -> List[Track]:
        params: Dict[str, Any] = {
            "limit": limit,
            "market": self.market,
            "seed_genres": ",".join(profile.genres[:5]),
        }
        for name, value in profile.target.items():
            params[f"target_{name}"] = value

        data = self._get("recommendations", params, headers)
        if not isinstance(data, dict):
            raise MatchError("Spotify recommendations returned an unexpected payload")
        return _parse_tracks(data.get("tracks"), profile.mood, limit)

    def recommend_tracks(
        self,
        mood: Union[str, Mood],
        limit: int = 10,
        tags: Sequence[str] = (),
    ) -> List[Track]:
        """
        Two-step strategy: recommendations endpoint first, then a search on
        photo tags + mood genres when recommendations fail or come back empty.

        Authentication failures raise MatchError right away; a failing
        fallback search raises MatchError too.
        """
        profile = get_profile(mood)
        limit = _clamp_limit(limit)
        headers = self.auth.headers()

        try:
            tracks = self._recommendations(profile, limit, headers)
        except MatchError as e:
            log_warning(f"Recommendations failed, falling back to search ({e})")
            tracks = []

        if tracks:
            log_success(f"Got {len(tracks)} recommendations for {profile.mood.value}")
            return tracks

        query = build_tag_query(profile.mood, tuple(tags))
        log_info(f"Searching tracks for {profile.mood.value} with query {query!r}")
        return self._search(query, profile.mood, limit, self.auth.headers())
