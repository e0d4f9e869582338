from typing import List, Mapping, Optional, Sequence

from moodsync.core import FeatureVector, Track


def score_features(
    features: Optional[Mapping[str, float]],
    target: FeatureVector,
) -> float:
    """
    Closeness of a track's audio features to a mood target, in [0, 1].

    Mean of ``1 - |actual - target|`` over the target attributes present in
    ``features``. No features, or no comparable attribute, scores 0.
    """
    if not features:
        return 0.0

    total = 0.0
    compared = 0
    for name, target_value in target.items():
        value = features.get(name)
        if value is None:
            continue
        try:
            value = float(value)
        except (TypeError, ValueError):
            continue
        total += 1 - abs(value - target_value)
        compared += 1

    return total / compared if compared else 0.0


def rank_tracks(
    tracks: Sequence[Track],
    features: Sequence[Optional[Mapping[str, float]]],
    target: FeatureVector,
) -> List[Track]:
    """
    Sort tracks by descending score against ``target``.

    ``features`` is aligned with ``tracks`` (missing entries may be None or
    the list may be shorter). The sort is stable, so equal scores keep the
    catalog order.
    """
    scored = []
    for index, track in enumerate(tracks):
        vector = features[index] if index < len(features) else None
        scored.append((score_features(vector, target), track))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [track for _score, track in scored]
