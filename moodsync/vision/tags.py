from typing import Iterable, List

from moodsync.core import ClassificationError, ClassificationResult, LabelScore
from moodsync.labels import TAG, resolve_mood_from_tags, tally_tags


class TagClassifier:
    """
    Mood classification for photos already described by free-text tags
    (e.g. produced by an external image tagging service).

    Labels of the result are the recognized emotions, scored by their share
    of the recognized tags.
    """

    def classify(self, tags: Iterable[str]) -> ClassificationResult:
        tags = [t for t in tags if isinstance(t, str) and t.strip()]
        if not tags:
            raise ClassificationError("No tags to classify")

        mood = resolve_mood_from_tags(tags)
        votes = tally_tags(tags)
        recognized = sum(votes.values())

        labels: List[LabelScore] = []
        if recognized:
            for emotion, count in votes.items():
                if count:
                    labels.append(
                        LabelScore(label=emotion.value, score=count / recognized)
                    )
            # The vote winner leads even when tied with another emotion.
            labels.sort(
                key=lambda ls: (ls.label == mood.value, ls.score), reverse=True
            )
        else:
            labels.append(LabelScore(label=mood.value, score=0.0))

        return ClassificationResult(
            labels=tuple(labels),
            mood=mood,
            top_label=labels[0].label,
            vocabulary=TAG.name,
        )
