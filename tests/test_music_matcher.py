from typing import Any, Dict, List, Optional

import pytest
import requests

from conftest import FakeResponse, FakeSession, make_track_item, token_response
from moodsync.core import MatchError, Mood
from moodsync.music import (
    MOOD_PROFILES,
    MusicMatcher,
    TokenCache,
    build_search_query,
    build_tag_query,
    get_profile,
)


def _routes(
    items: List[Dict[str, Any]],
    features: Optional[List[Optional[Dict[str, float]]]] = None,
    features_status: int = 200,
    search_status: int = 200,
) -> Dict[tuple, Any]:
    def search(url, **kwargs):
        if search_status != 200:
            return FakeResponse({"error": "x"}, search_status, "Error")
        limit = kwargs["params"]["limit"]
        return FakeResponse({"tracks": {"items": items[:limit]}})

    def audio_features(url, **kwargs):
        if features_status != 200:
            return FakeResponse({"error": "gone"}, features_status, "Forbidden")
        return FakeResponse({"audio_features": features or []})

    return {
        ("POST", "/api/token"): token_response,
        ("GET", "/search"): search,
        ("GET", "/audio-features"): audio_features,
    }


def _matcher(settings, **kwargs) -> MusicMatcher:
    session = FakeSession(_routes(**kwargs))
    return MusicMatcher(settings, session=session, token_cache=TokenCache())


def test_every_mood_has_a_query_template_and_target() -> None:
    assert set(MOOD_PROFILES) == set(Mood)
    for mood in Mood:
        assert build_search_query(mood).strip()
        assert get_profile(mood).target


def test_unknown_mood_uses_neutral_profile() -> None:
    assert get_profile("spooky") is MOOD_PROFILES[Mood.neutral]
    assert build_search_query("CALM") == MOOD_PROFILES[Mood.calm].query


def test_tag_query_uses_three_tags_and_two_genres() -> None:
    query = build_tag_query(Mood.calm, ("sky", "water", "beach", "sand"))
    assert query == "sky water beach ambient classical"


def test_find_tracks_searches_with_mood_query(settings) -> None:
    items = [make_track_item("a"), make_track_item("b")]
    matcher = _matcher(settings, items=items, features_status=403)

    tracks = matcher.find_tracks(Mood.party, limit=2)

    assert [t.id for t in tracks] == ["a", "b"]
    search_call = next(c for c in matcher.session.calls if c[1].endswith("/search"))
    params = search_call[2]["params"]
    assert params["q"] == MOOD_PROFILES[Mood.party].query
    assert params["type"] == "track"
    assert params["limit"] == 2
    assert params["market"] == "US"
    assert search_call[2]["headers"] == {"Authorization": "Bearer tok-1"}


def test_track_fields_are_parsed(settings) -> None:
    matcher = _matcher(settings, items=[make_track_item("a", "Ocean Waves")], features_status=403)

    track = matcher.find_tracks("calm", limit=1)[0]

    assert track.title == "Ocean Waves"
    assert track.artists == ("Test Artist", "Guest")
    assert track.artist == "Test Artist, Guest"
    assert track.duration_seconds == 183
    assert track.artwork_url == "https://img.test/a.jpg"
    assert track.external_url == "https://open.spotify.com/track/a"
    assert track.preview_url is None
    assert track.playable_url == track.external_url
    assert track.mood is Mood.calm


def test_tracks_reranked_by_closeness_to_target(settings) -> None:
    # calm target: valence 0.5, energy 0.2, acousticness 0.7
    items = [make_track_item(i) for i in ("far", "none1", "close", "none2")]
    features = [
        {"id": "far", "valence": 0.9, "energy": 0.9, "acousticness": 0.1},
        None,
        {"id": "close", "valence": 0.5, "energy": 0.25, "acousticness": 0.7},
        None,
    ]
    matcher = _matcher(settings, items=items, features=features)

    tracks = matcher.find_tracks(Mood.calm, limit=4)

    assert [t.id for t in tracks] == ["close", "far", "none1", "none2"]
    features_call = next(c for c in matcher.session.calls if c[1].endswith("/audio-features"))
    assert features_call[2]["params"] == {"ids": "far,none1,close,none2"}


def test_features_failure_returns_unranked_tracks(settings) -> None:
    items = [make_track_item(i) for i in ("x", "y", "z")]
    matcher = _matcher(settings, items=items, features_status=403)

    tracks = matcher.find_tracks(Mood.happy, limit=3)

    assert [t.id for t in tracks] == ["x", "y", "z"]


def test_features_network_error_returns_unranked_tracks(settings) -> None:
    items = [make_track_item(i) for i in ("x", "y")]
    session = FakeSession(_routes(items=items))

    def broken(url, **kwargs):
        raise requests.ConnectionError("reset")

    session.routes[("GET", "/audio-features")] = broken
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    assert [t.id for t in matcher.find_tracks(Mood.happy, limit=2)] == ["x", "y"]


def test_search_failure_is_a_match_error(settings) -> None:
    matcher = _matcher(settings, items=[], search_status=500)
    with pytest.raises(MatchError, match="search"):
        matcher.find_tracks(Mood.cozy)


def test_auth_failure_is_a_match_error(settings) -> None:
    session = FakeSession(_routes(items=[]))
    session.routes[("POST", "/api/token")] = lambda url, **kw: FakeResponse({}, 400, "Bad Request")
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    with pytest.raises(MatchError):
        matcher.find_tracks(Mood.cozy)
    assert session.count("GET", "/search") == 0


def test_two_searches_share_one_token_request(settings) -> None:
    matcher = _matcher(settings, items=[make_track_item("a")], features_status=403)

    matcher.find_tracks(Mood.calm, 1)
    matcher.find_tracks(Mood.party, 1)

    assert matcher.session.count("POST", "/api/token") == 1


def test_unauthorized_search_invalidates_cached_token(settings) -> None:
    matcher = _matcher(settings, items=[], search_status=401)

    with pytest.raises(MatchError):
        matcher.find_tracks(Mood.calm)
    with pytest.raises(MatchError):
        matcher.find_tracks(Mood.calm)

    assert matcher.session.count("POST", "/api/token") == 2


def test_empty_search_result_skips_features_call(settings) -> None:
    matcher = _matcher(settings, items=[])

    assert matcher.find_tracks(Mood.calm) == []
    assert matcher.session.count("GET", "/audio-features") == 0


def test_limit_is_clamped_to_catalog_maximum(settings) -> None:
    matcher = _matcher(settings, items=[], features_status=403)
    matcher.find_tracks(Mood.calm, limit=500)

    search_call = next(c for c in matcher.session.calls if c[1].endswith("/search"))
    assert search_call[2]["params"]["limit"] == 50


def test_recommend_tracks_uses_recommendations_first(settings) -> None:
    session = FakeSession(_routes(items=[make_track_item("s")]))
    session.routes[("GET", "/recommendations")] = lambda url, **kw: FakeResponse(
        {"tracks": [make_track_item("r1"), make_track_item("r2")]}
    )
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    tracks = matcher.recommend_tracks(Mood.mysterious, limit=2, tags=["night"])

    assert [t.id for t in tracks] == ["r1", "r2"]
    assert session.count("GET", "/search") == 0
    rec_call = next(c for c in session.calls if c[1].endswith("/recommendations"))
    params = rec_call[2]["params"]
    assert params["seed_genres"] == "ambient,electronic,dark,experimental"
    assert params["target_instrumentalness"] == 0.6


def test_recommend_tracks_falls_back_to_tag_search(settings) -> None:
    session = FakeSession(_routes(items=[make_track_item("s1")]))
    session.routes[("GET", "/recommendations")] = lambda url, **kw: FakeResponse({}, 404, "Not Found")
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    tracks = matcher.recommend_tracks(Mood.calm, limit=5, tags=["sky", "water"])

    assert [t.id for t in tracks] == ["s1"]
    search_call = next(c for c in session.calls if c[1].endswith("/search"))
    assert search_call[2]["params"]["q"] == "sky water ambient classical"


def test_recommend_tracks_fallback_failure_is_a_match_error(settings) -> None:
    session = FakeSession(_routes(items=[], search_status=500))
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    with pytest.raises(MatchError):
        matcher.recommend_tracks(Mood.calm)


def test_features_payload_that_is_not_an_object_returns_unranked_tracks(settings) -> None:
    session = FakeSession(_routes(items=[make_track_item("a"), make_track_item("b")]))
    session.routes[("GET", "/audio-features")] = lambda url, **kw: FakeResponse([{"id": "a"}])
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    assert [t.id for t in matcher.find_tracks(Mood.calm, 2)] == ["a", "b"]


@pytest.mark.parametrize("payload", [[], "oops", {"tracks": []}, {"tracks": None}])
def test_unexpected_search_payload_is_a_match_error(settings, payload) -> None:
    session = FakeSession(_routes(items=[]))
    session.routes[("GET", "/search")] = lambda url, **kw: FakeResponse(payload)
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    with pytest.raises(MatchError, match="search"):
        matcher.find_tracks(Mood.calm)


def test_malformed_album_images_and_urls_are_skipped(settings) -> None:
    item = make_track_item("a")
    item["album"]["images"] = ["not-an-image", {"url": "https://img.test/ok.jpg"}]
    item["external_urls"] = ["https://open.spotify.com/track/a"]
    matcher = _matcher(settings, items=[item], features_status=403)

    track = matcher.find_tracks(Mood.calm, 1)[0]

    assert track.artwork_url == "https://img.test/ok.jpg"
    assert track.external_url == ""


def test_recommendations_payload_that_is_not_an_object_falls_back_to_search(settings) -> None:
    session = FakeSession(_routes(items=[make_track_item("s1")]))
    session.routes[("GET", "/recommendations")] = lambda url, **kw: FakeResponse(["r1"])
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    assert [t.id for t in matcher.recommend_tracks(Mood.calm, limit=3)] == ["s1"]


@pytest.mark.parametrize("expires_in", [None, "soon", True])
def test_invalid_token_lifetime_is_a_match_error(settings, expires_in) -> None:
    session = FakeSession(_routes(items=[make_track_item("a")]))
    session.routes[("POST", "/api/token")] = lambda url, **kw: FakeResponse(
        {"access_token": "x", "expires_in": expires_in}
    )
    matcher = MusicMatcher(settings, session=session, token_cache=TokenCache())

    with pytest.raises(MatchError, match="expires_in"):
        matcher.find_tracks(Mood.calm)
    assert session.count("GET", "/search") == 0
