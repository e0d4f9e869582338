"""Public façade for the moodsync.pipeline package.

This module exposes the photo → music orchestration and the reporting
helpers built on its results. Other packages should import pipeline
behaviour from this façade instead of the internal submodules.
"""

from .orchestration import (
    DEFAULT_MUSIC_LIMIT,
    PipelineOrchestrator,
    build_orchestrator,
)
from .reporting import (
    build_shareable_summary,
    format_processing_time,
    mood_display_info,
)

__all__ = [
    "PipelineOrchestrator",
    "build_orchestrator",
    "DEFAULT_MUSIC_LIMIT",
    "format_processing_time",
    "mood_display_info",
    "build_shareable_summary",
]
