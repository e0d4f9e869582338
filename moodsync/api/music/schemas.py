from typing import List

from pydantic import BaseModel

from moodsync.api.schemas import ClassificationOut, TrackOut
from moodsync.pipeline import DEFAULT_MUSIC_LIMIT


class MoodInfo(BaseModel):
    mood: str
    color: str
    emoji: str
    playlist_name: str
    reasoning: str


class MoodsResponse(BaseModel):
    moods: List[MoodInfo]


class MoodTracksResponse(BaseModel):
    mood: str
    playlist_name: str
    reasoning: str
    tracks: List[TrackOut]


class TagsRequest(BaseModel):
    tags: List[str]
    limit: int = DEFAULT_MUSIC_LIMIT


class TagsResponse(BaseModel):
    classification: ClassificationOut
    tracks: List[TrackOut]
