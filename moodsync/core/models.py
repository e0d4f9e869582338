from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Mood(str, Enum):
    """
    Closed set of mood / vibe tags used to pick music.

    This is the superset of the two vocabularies the classifiers speak
    (see moodsync.labels.vocabularies).
    """

    happy = "happy"
    calm = "calm"
    energetic = "energetic"
    melancholy = "melancholy"
    romantic = "romantic"
    mysterious = "mysterious"
    party = "party"
    cozy = "cozy"
    neutral = "neutral"

    @classmethod
    def parse(cls, value: "str | Mood") -> Optional["Mood"]:
        """Case-insensitive lookup; returns None for names outside the enum."""
        if isinstance(value, Mood):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# Audio feature name -> value, as returned by the catalog (valence, energy, ...)
FeatureVector = Dict[str, float]


@dataclass(frozen=True)
class LabelScore:
    label: str
    score: float


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of one classification call.

    - labels     : (label, score) pairs, sorted by descending score, never empty
    - mood       : mood resolved from the top label
    - top_label  : raw top label (scene category or tag)
    - vocabulary : name of the label table that resolved the mood
    """

    labels: Tuple[LabelScore, ...]
    mood: Mood
    top_label: str
    vocabulary: str

    @property
    def confidence(self) -> float:
        return self.labels[0].score


@dataclass(frozen=True)
class Track:
    id: str
    title: str
    artists: Tuple[str, ...]
    duration_seconds: int
    external_url: str
    artwork_url: str
    mood: Mood
    preview_url: Optional[str] = None

    @property
    def artist(self) -> str:
        return ", ".join(self.artists)

    @property
    def playable_url(self) -> str:
        """Preview clip when the catalog has one, otherwise the track page."""
        return self.preview_url or self.external_url


@dataclass(frozen=True)
class PipelineResult:
    classification: ClassificationResult
    tracks: Tuple[Track, ...] = field(default_factory=tuple)
    elapsed_ms: float = 0.0
    # Free-text photo tags, set by the tag-based run only
    tags: Tuple[str, ...] = field(default_factory=tuple)
