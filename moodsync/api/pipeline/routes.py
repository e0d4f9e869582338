from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool

from moodsync.api.dependencies import get_orchestrator
from moodsync.api.schemas import ClassificationOut, TrackOut
from moodsync.config import missing_settings
from moodsync.core import ConfigurationError, PipelineError, PipelineResult, log_step
from moodsync.music import MAX_LIMIT
from moodsync.pipeline import (
    DEFAULT_MUSIC_LIMIT,
    PipelineOrchestrator,
    build_shareable_summary,
    format_processing_time,
)

from .schemas import AnalyzeResponse, ConfigResponse

router = APIRouter()


@router.get("/health")
def pipeline_health() -> dict:
    return {"status": "ok"}


@router.get("/config", response_model=ConfigResponse)
def pipeline_config() -> ConfigResponse:
    """
    Whether every required setting is present (names only, never values).
    """
    missing = missing_settings()
    return ConfigResponse(valid=not missing, missing=missing)


def _analyze_response(step: str, result: PipelineResult) -> AnalyzeResponse:
    return AnalyzeResponse(
        step=step,
        status="done",
        classification=ClassificationOut.from_result(result.classification),
        tags=list(result.tags),
        tracks=[TrackOut.from_track(t) for t in result.tracks],
        elapsed_ms=round(result.elapsed_ms, 1),
        processing_time=format_processing_time(result.elapsed_ms),
        summary=build_shareable_summary(result),
    )


async def _image_body(request: Request) -> bytes:
    image_bytes = await request.body()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Request body must contain image bytes.")
    return image_bytes


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: Request,
    limit: int = Query(default=DEFAULT_MUSIC_LIMIT, ge=1, le=MAX_LIMIT),
    orchestrator: PipelineOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResponse:
    """
    Full pipeline on the raw image bytes sent as request body.

    - 400 when the body is empty
    - 502 with {stage, message, elapsed_ms} when a stage fails
    """
    image_bytes = await _image_body(request)
    log_step(f"Analyze request ({len(image_bytes)} bytes, limit={limit})...")

    try:
        result = await run_in_threadpool(orchestrator.run, image_bytes, limit)
    except PipelineError as e:
        raise HTTPException(status_code=502, detail=e.to_dict())

    return _analyze_response("analyze", result)


@router.post("/analyze-tags", response_model=AnalyzeResponse)
async def analyze_tags(
    request: Request,
    limit: int = Query(default=DEFAULT_MUSIC_LIMIT, ge=1, le=MAX_LIMIT),
    orchestrator: PipelineOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResponse:
    """
    Tag-based pipeline: photo → tags → mood → recommendations.

    - 400 when the body is empty
    - 502 with {stage, message, elapsed_ms} when a stage fails
    - 503 when image tagging is not configured
    """
    image_bytes = await _image_body(request)
    log_step(f"Tag analyze request ({len(image_bytes)} bytes, limit={limit})...")

    try:
        result = await run_in_threadpool(orchestrator.run_tagged, image_bytes, limit)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=503,
            detail={"message": str(e), "missing": e.missing},
        )
    except PipelineError as e:
        raise HTTPException(status_code=502, detail=e.to_dict())

    return _analyze_response("analyze-tags", result)
