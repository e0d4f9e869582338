from typing import List

from pydantic import BaseModel

from moodsync.api.schemas import ClassificationOut, TrackOut


class AnalyzeResponse(BaseModel):
    step: str = "analyze"
    status: str
    classification: ClassificationOut
    tags: List[str] = []
    tracks: List[TrackOut]
    elapsed_ms: float
    processing_time: str
    summary: str


class ConfigResponse(BaseModel):
    valid: bool
    missing: List[str]
