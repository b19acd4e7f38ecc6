import asyncio
import logging
import time

from pydantic import BaseModel
from fastapi import APIRouter, Depends, HTTPException

from api.backend import BackendAPI
from api.dependencies import get_backend, get_task_store
from api.metrics import REQUESTS_TOTAL
from api.routers.notes import record_extraction
from diary_planner.errors import NoTextExtractedError
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


class PromptIn(BaseModel):
    prompt: str


@router.post("/prompts")
async def submit_prompt(
    payload: PromptIn,
    store: TaskStore = Depends(get_task_store),
    backend: BackendAPI = Depends(get_backend),
) -> dict:
    """Create tasks from free-form deadline sentences, one per line."""
    start = time.time()
    logger.info(f"Received deadline prompt: {payload.prompt[:50]}...")

    try:
        result = await asyncio.to_thread(backend.submit_prompt, payload.prompt, store)
    except NoTextExtractedError as e:
        REQUESTS_TOTAL.labels(endpoint="/prompts", status="rejected").inc()
        raise HTTPException(status_code=422, detail=str(e))

    record_extraction("/prompts", result, store, start)
    return {"status": "processed", **result}
