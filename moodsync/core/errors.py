"""Domain exceptions raised by the MoodSync pipeline.

Vendor I/O failures (requests exceptions, malformed JSON) are caught at the
client boundary and re-raised as one of these, so callers only ever handle
MoodSync errors.
"""

from enum import Enum
from typing import Iterable, List, Optional


class PipelineStage(str, Enum):
    classification = "classification"
    matching = "matching"
    generic = "generic"


class MoodSyncError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MoodSyncError):
    """
    Raised when required settings are absent.

    ``missing`` lists every absent setting name, not only the first one.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            "Missing required configuration: " + ", ".join(self.missing)
        )


class ClassificationError(MoodSyncError):
    """The image classifier failed or returned nothing usable."""


class MatchError(MoodSyncError):
    """Authentication or search against the music catalog failed."""


class PipelineError(MoodSyncError):
    """
    Failure of a whole pipeline run, tagged with the stage it came from.

    ``elapsed_ms`` is the time spent up to the failure point.
    """

    def __init__(
        self,
        stage: PipelineStage,
        message: str,
        elapsed_ms: float,
        cause: Optional[BaseException] = None,
    ):
        self.stage = PipelineStage(stage)
        self.message = message
        self.elapsed_ms = elapsed_ms
        self.cause = cause
        super().__init__(f"[{self.stage.value}] {message}")

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "message": self.message,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }
