"""Label → mood resolution.

Every function here is pure and total: any input string resolves to a member
of Mood, falling back to the vocabulary default when the label is unknown.
"""

import re
from collections import Counter
from typing import Dict, Iterable, Union

from moodsync.core.models import Mood

from .vocabularies import RECONCILIATION, SCENE, TAG, VOCABULARIES, Vocabulary

_SEPARATORS = re.compile(r"[\s\-]+")


def _get_vocabulary(vocabulary: Union[str, Vocabulary]) -> Vocabulary:
    if isinstance(vocabulary, Vocabulary):
        return vocabulary
    return VOCABULARIES[vocabulary]


def _scene_keys(raw_label: str):
    """
    Candidate lookup keys for a scene label.

    Places365 labels come in several spellings depending on the deployment:
    "beach", "Beach", "/b/beach", "forest path", "beach/outdoor",
    "coffee shop, cafe". The first matching candidate wins.
    """
    for part in raw_label.split(","):
        label = part.strip().lower()
        if not label:
            continue
        segments = [s for s in label.split("/") if s]
        # "/b/beach" -> ["b", "beach"]: drop the single-letter index prefix
        if len(segments) > 1 and len(segments[0]) == 1:
            segments = segments[1:]
        for segment in segments or [label]:
            yield _SEPARATORS.sub("_", segment.strip())


def resolve_mood(
    raw_label: str,
    vocabulary: Union[str, Vocabulary] = SCENE,
) -> Mood:
    """
    Resolve a raw vendor label to a Mood using the given vocabulary table.

    Case-insensitive; unknown or empty labels return the vocabulary default
    (neutral for scenes, calm for tags).
    """
    vocab = _get_vocabulary(vocabulary)
    if not isinstance(raw_label, str):
        return vocab.default

    if vocab is SCENE:
        for key in _scene_keys(raw_label):
            mood = vocab.table.get(key)
            if mood is not None:
                return mood
        return vocab.default

    return vocab.table.get(raw_label.strip().lower(), vocab.default)


def tally_tags(tags: Iterable[str]) -> Dict[Mood, int]:
    """
    Count tag votes per TAG mood (zero counts included, in vocabulary order).
    """
    votes: Dict[Mood, int] = {mood: 0 for mood in TAG.moods}
    for tag in tags:
        if not isinstance(tag, str):
            continue
        mood = TAG.table.get(tag.strip().lower())
        if mood is not None:
            votes[mood] += 1
    return votes


def resolve_mood_from_tags(tags: Iterable[str]) -> Mood:
    """
    Majority vote over free-text tags.

    Ties go to the mood that comes later in TAG vocabulary order; no
    recognized tag at all returns calm.
    """
    votes = tally_tags(tags)

    best = TAG.default
    best_count = 0
    for mood, count in votes.items():
        if count > 0 and count >= best_count:
            best, best_count = mood, count
    return best


def reconcile(mood: Union[str, Mood]) -> Mood:
    """
    Map any mood (or mood name) onto the TAG vocabulary.
    """
    parsed = Mood.parse(mood)
    if parsed is None:
        return TAG.default
    return RECONCILIATION[parsed]


def dominant_mood(moods: Iterable[Union[str, Mood]]) -> Mood:
    """
    Overall mood of a set of photos (an album).

    Photos classified by either path are first reconciled onto the TAG
    vocabulary; the most frequent one wins, first seen on ties. An empty
    album is calm.
    """
    counts = Counter(reconcile(m) for m in moods)
    if not counts:
        return TAG.default
    return counts.most_common(1)[0][0]
