"""Public façade for the moodsync.vision package (photo → mood)."""

from .classifier import VisionClassifier, normalize_predictions
from .tagger import ImageTagger, parse_tags
from .tags import TagClassifier

__all__ = [
    "VisionClassifier",
    "ImageTagger",
    "TagClassifier",
    "normalize_predictions",
    "parse_tags",
]
