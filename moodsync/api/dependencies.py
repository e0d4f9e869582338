from functools import lru_cache

from fastapi import HTTPException

from moodsync.core import ConfigurationError
from moodsync.music import MusicMatcher
from moodsync.pipeline import PipelineOrchestrator, build_orchestrator
from moodsync.vision import TagClassifier


@lru_cache(maxsize=1)
def _cached_orchestrator() -> PipelineOrchestrator:
    return build_orchestrator()


def get_orchestrator() -> PipelineOrchestrator:
    """
    Process-wide orchestrator (one shared token cache for all requests).

    Missing settings surface as 503 with the list of absent variables; the
    orchestrator is built again on the next request once they are set.
    """
    try:
        return _cached_orchestrator()
    except ConfigurationError as e:
        raise HTTPException(
            status_code=503,
            detail={"message": str(e), "missing": e.missing},
        )


def get_matcher() -> MusicMatcher:
    return get_orchestrator().matcher


def get_tag_classifier() -> TagClassifier:
    return TagClassifier()
