import logging
import os

from fastapi import FastAPI

from api.routers import diary_photos, notes, ops, prompts, tasks

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Logging configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Diary Planner")

app.include_router(notes.router)
app.include_router(prompts.router)
app.include_router(diary_photos.router)
app.include_router(tasks.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    logger.info(
        f"Diary planner started (OCR provider: {os.getenv('OCR_PROVIDER', 'tesseract')})"
    )
