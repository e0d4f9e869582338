"""Public façade for the moodsync.core package.

This module exposes logging helpers, domain errors and value objects that are
safe to import from other packages. Callers should import these cross-cutting
concerns from this façade instead of the internal submodules.
"""

from .errors import (
    ClassificationError,
    ConfigurationError,
    MatchError,
    MoodSyncError,
    PipelineError,
    PipelineStage,
)
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_section,
    log_stage,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    ClassificationResult,
    FeatureVector,
    LabelScore,
    Mood,
    PipelineResult,
    Track,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_stage",
    "log_success",
    "log_warning",
    "log_error",
    "MoodSyncError",
    "ConfigurationError",
    "ClassificationError",
    "MatchError",
    "PipelineError",
    "PipelineStage",
    "Mood",
    "FeatureVector",
    "LabelScore",
    "ClassificationResult",
    "Track",
    "PipelineResult",
]
