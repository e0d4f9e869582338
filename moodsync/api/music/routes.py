from fastapi import APIRouter, Depends, HTTPException, Query

from moodsync.api.dependencies import get_matcher, get_tag_classifier
from moodsync.api.schemas import ClassificationOut, TrackOut
from moodsync.core import ClassificationError, MatchError, Mood
from moodsync.music import MAX_LIMIT, MusicMatcher
from moodsync.pipeline import DEFAULT_MUSIC_LIMIT, mood_display_info
from moodsync.vision import TagClassifier

from .schemas import (
    MoodInfo,
    MoodsResponse,
    MoodTracksResponse,
    TagsRequest,
    TagsResponse,
)

router = APIRouter()


@router.get("/moods", response_model=MoodsResponse)
def list_moods() -> MoodsResponse:
    return MoodsResponse(moods=[MoodInfo(**mood_display_info(m)) for m in Mood])


@router.post("/tags", response_model=TagsResponse)
def tracks_for_tags(
    body: TagsRequest,
    classifier: TagClassifier = Depends(get_tag_classifier),
    matcher: MusicMatcher = Depends(get_matcher),
) -> TagsResponse:
    """
    Mood from photo tags, then recommendations (search as fallback).
    """
    try:
        classification = classifier.classify(body.tags)
    except ClassificationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    limit = max(1, min(MAX_LIMIT, body.limit))
    try:
        tracks = matcher.recommend_tracks(classification.mood, limit, tags=body.tags)
    except MatchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return TagsResponse(
        classification=ClassificationOut.from_result(classification),
        tracks=[TrackOut.from_track(t) for t in tracks],
    )


@router.get("/{mood}", response_model=MoodTracksResponse)
def tracks_for_mood(
    mood: str,
    limit: int = Query(default=DEFAULT_MUSIC_LIMIT, ge=1, le=MAX_LIMIT),
    matcher: MusicMatcher = Depends(get_matcher),
) -> MoodTracksResponse:
    """
    Manual mood selection (no photo classification).
    """
    parsed = Mood.parse(mood)
    if parsed is None:
        raise HTTPException(status_code=404, detail=f"Unknown mood: {mood}")

    try:
        tracks = matcher.find_tracks(parsed, limit)
    except MatchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    info = mood_display_info(parsed)
    return MoodTracksResponse(
        mood=parsed.value,
        playlist_name=info["playlist_name"],
        reasoning=info["reasoning"],
        tracks=[TrackOut.from_track(t) for t in tracks],
    )
