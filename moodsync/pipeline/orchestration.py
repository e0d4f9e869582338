"""Photo → mood → music pipeline.

PipelineOrchestrator.run() classifies a photo, then looks up tracks for the
resolved mood. The two stages are strictly sequential. Any failure is
re-raised as a PipelineError tagged with the stage it came from, and no
partial result is ever returned.

run_tagged() is the tag-based variant: the photo is described by free-text
tags, the tags vote for a mood, and tracks come from recommendations (with a
tag search as fallback). Tagging counts as the classification stage.

Per-run states: idle → classifying → matching → complete, or → failed from
either working state. There are no retries here; retrying is up to the
caller (e.g. the upload UI).
"""

import time
from typing import Callable, List, Optional, Sequence, Tuple, Union

from moodsync.config import Settings, load_settings
from moodsync.core import (
    ClassificationError,
    ClassificationResult,
    ConfigurationError,
    MatchError,
    Mood,
    PipelineError,
    PipelineResult,
    PipelineStage,
    Track,
    log_error,
    log_stage,
    log_success,
)
from moodsync.music import MusicMatcher, TokenCache
from moodsync.vision import ImageTagger, TagClassifier, VisionClassifier

DEFAULT_MUSIC_LIMIT = 10

StageOutcome = Tuple[ClassificationResult, Sequence[Track], Sequence[str]]


class PipelineOrchestrator:
    def __init__(
        self,
        classifier: VisionClassifier,
        matcher: MusicMatcher,
        clock: Callable[[], float] = time.perf_counter,
        tagger: Optional[ImageTagger] = None,
        tag_classifier: Optional[TagClassifier] = None,
    ):
        self.classifier = classifier
        self.matcher = matcher
        self.tagger = tagger
        self.tag_classifier = tag_classifier or TagClassifier()
        self._clock = clock

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000

    def _fail(
        self,
        stage: PipelineStage,
        error: BaseException,
        start: float,
    ) -> PipelineError:
        elapsed = self._elapsed_ms(start)
        log_stage("failed", f"{stage.value}: {error}")
        log_error(f"Pipeline failed during {stage.value} after {elapsed:.0f}ms: {error}")
        return PipelineError(
            stage=stage,
            message=str(error) or error.__class__.__name__,
            elapsed_ms=elapsed,
            cause=error,
        )

    def _execute(self, stages: Callable[[], StageOutcome]) -> PipelineResult:
        start = self._clock()

        try:
            classification, tracks, tags = stages()
        except ClassificationError as e:
            raise self._fail(PipelineStage.classification, e, start) from e
        except MatchError as e:
            raise self._fail(PipelineStage.matching, e, start) from e
        except Exception as e:
            # Bugs and unexpected vendor data end up here.
            raise self._fail(PipelineStage.generic, e, start) from e

        elapsed = self._elapsed_ms(start)
        log_stage("complete", f"{elapsed:.0f}ms")
        log_success(
            f"{classification.mood.value}: {len(tracks)} tracks in {elapsed:.0f}ms"
        )
        return PipelineResult(
            classification=classification,
            tracks=tuple(tracks),
            elapsed_ms=elapsed,
            tags=tuple(tags),
        )

    def run(self, image_bytes: bytes, limit: int = DEFAULT_MUSIC_LIMIT) -> PipelineResult:
        """
        Classify ``image_bytes`` and find up to ``limit`` matching tracks.

        Raises PipelineError (stage classification, matching or generic).
        The matcher is never called when classification fails.
        """

        def stages() -> StageOutcome:
            log_stage("classifying")
            classification = self.classifier.classify(image_bytes)

            log_stage("matching", classification.mood.value)
            return classification, self.matcher.find_tracks(classification.mood, limit), ()

        return self._execute(stages)

    def run_tagged(
        self,
        image_bytes: bytes,
        limit: int = DEFAULT_MUSIC_LIMIT,
    ) -> PipelineResult:
        """
        Tag ``image_bytes``, vote a mood from the tags, then recommend tracks.

        Raises ConfigurationError up front when no image tagger is set up,
        otherwise PipelineError like run().
        """
        if self.tagger is None or not self.tagger.configured:
            raise ConfigurationError(["GEMINI_API_KEY"])

        def stages() -> StageOutcome:
            log_stage("classifying", "tags")
            tags = self.tagger.tag(image_bytes)
            classification = self.tag_classifier.classify(tags)

            log_stage("matching", classification.mood.value)
            tracks = self.matcher.recommend_tracks(classification.mood, limit, tags=tags)
            return classification, tracks, tags

        return self._execute(stages)

    def music_for_mood(
        self,
        mood: Union[str, Mood],
        limit: int = DEFAULT_MUSIC_LIMIT,
    ) -> List[Track]:
        """
        Manual mood selection: skip classification entirely.

        Raises MatchError like MusicMatcher.find_tracks.
        """
        return self.matcher.find_tracks(mood, limit)


def build_orchestrator(
    settings: Optional[Settings] = None,
    token_cache: Optional[TokenCache] = None,
) -> PipelineOrchestrator:
    """
    Wire a PipelineOrchestrator from settings (loaded from the environment
    when not given). Raises ConfigurationError when settings are missing.

    The image tagger is only wired when GEMINI_API_KEY is set.
    """
    settings = settings or load_settings()
    token_cache = token_cache or TokenCache(refresh_margin=settings.token_refresh_margin)
    tagger = ImageTagger(settings) if settings.gemini_api_key else None
    return PipelineOrchestrator(
        classifier=VisionClassifier(settings),
        matcher=MusicMatcher(settings, token_cache=token_cache),
        tagger=tagger,
    )
