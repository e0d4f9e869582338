"""Pydantic schemas shared by the pipeline and music routes."""

from typing import List, Optional

from pydantic import BaseModel

from moodsync.core import ClassificationResult, Track


class LabelScoreOut(BaseModel):
    label: str
    score: float


class ClassificationOut(BaseModel):
    mood: str
    top_label: str
    confidence: float
    vocabulary: str
    labels: List[LabelScoreOut]

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationOut":
        return cls(
            mood=result.mood.value,
            top_label=result.top_label,
            confidence=result.confidence,
            vocabulary=result.vocabulary,
            labels=[LabelScoreOut(label=ls.label, score=ls.score) for ls in result.labels],
        )


class TrackOut(BaseModel):
    id: str
    title: str
    artist: str
    artists: List[str]
    duration: int
    src: str
    preview_url: Optional[str] = None
    spotify_url: str
    album_art: str
    mood: str

    @classmethod
    def from_track(cls, track: Track) -> "TrackOut":
        return cls(
            id=track.id,
            title=track.title,
            artist=track.artist,
            artists=list(track.artists),
            duration=track.duration_seconds,
            src=track.playable_url,
            preview_url=track.preview_url,
            spotify_url=track.external_url,
            album_art=track.artwork_url,
            mood=track.mood.value,
        )
