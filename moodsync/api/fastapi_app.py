from fastapi import FastAPI

from moodsync import __version__
from moodsync.api.music.routes import router as music_router
from moodsync.api.pipeline.routes import router as pipeline_router
from moodsync.config import LOG_LEVEL
from moodsync.core import configure_logging

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="MoodSync API",
    version=__version__,
    description="Mood labels and matching songs for gallery photos.",
)

app.include_router(pipeline_router, prefix="/pipeline", tags=["pipeline"])
app.include_router(music_router, prefix="/music", tags=["music"])
