"""Public façade for the moodsync.music package.

This module exposes the mood → tracks matcher, its token cache and the
per-mood profiles. Callers should import these symbols from this façade
instead of the internal auth, profiles, ranking or matcher modules.
"""

from .auth import SpotifyClientCredentials, TokenCache
from .matcher import MAX_LIMIT, MusicMatcher
from .profiles import (
    MOOD_PROFILES,
    MoodProfile,
    build_search_query,
    build_tag_query,
    get_profile,
)
from .ranking import rank_tracks, score_features

__all__ = [
    "MusicMatcher",
    "MAX_LIMIT",
    "TokenCache",
    "SpotifyClientCredentials",
    "MoodProfile",
    "MOOD_PROFILES",
    "get_profile",
    "build_search_query",
    "build_tag_query",
    "score_features",
    "rank_tracks",
]
