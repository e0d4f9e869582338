"""Public façade for the moodsync.labels package (label → mood tables)."""

from .mapper import (
    dominant_mood,
    reconcile,
    resolve_mood,
    resolve_mood_from_tags,
    tally_tags,
)
from .vocabularies import RECONCILIATION, SCENE, TAG, VOCABULARIES, Vocabulary

__all__ = [
    "resolve_mood",
    "resolve_mood_from_tags",
    "tally_tags",
    "reconcile",
    "dominant_mood",
    "Vocabulary",
    "SCENE",
    "TAG",
    "VOCABULARIES",
    "RECONCILIATION",
]
