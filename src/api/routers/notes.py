import asyncio
import logging
import time

from pydantic import BaseModel
from fastapi import APIRouter, Depends, HTTPException

from api.backend import BackendAPI
from api.dependencies import get_backend, get_task_store
from api.metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    TASKS_EXTRACTED_TOTAL,
    FALLBACK_TASKS_TOTAL,
    TASKS_STORED,
)
from diary_planner.errors import NoTextExtractedError
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


class NotesIn(BaseModel):
    notes: str


def record_extraction(endpoint: str, result: dict, store: TaskStore, started: float) -> None:
    """Update Prometheus counters after a successful extraction."""
    REQUESTS_TOTAL.labels(endpoint=endpoint, status="processed").inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - started)
    if result.get("fallback"):
        FALLBACK_TASKS_TOTAL.inc()
    else:
        TASKS_EXTRACTED_TOTAL.inc(result.get("tasks_processed", 0))
    TASKS_STORED.set(len(store))


@router.post("/notes")
async def submit_notes(
    payload: NotesIn,
    store: TaskStore = Depends(get_task_store),
    backend: BackendAPI = Depends(get_backend),
) -> dict:
    start = time.time()
    logger.info(f"Received notes submission: {payload.notes[:50]}...")

    try:
        result = await asyncio.to_thread(backend.submit_notes, payload.notes, store)
    except NoTextExtractedError as e:
        REQUESTS_TOTAL.labels(endpoint="/notes", status="rejected").inc()
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing notes: {e}")
        REQUESTS_TOTAL.labels(endpoint="/notes", status="error").inc()
        raise

    logger.info(f"Notes processed successfully. Tasks found: {result['tasks_processed']}")
    record_extraction("/notes", result, store, start)
    return {"status": "processed", **result}
