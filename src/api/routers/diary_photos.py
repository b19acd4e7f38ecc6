import asyncio
import logging
import os
import time

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from api.backend import BackendAPI
from api.dependencies import get_backend, get_task_store
from api.metrics import REQUESTS_TOTAL, OCR_FAILURES_TOTAL
from api.routers.notes import record_extraction
from diary_planner.errors import NoTextExtractedError, OCRError, UnsupportedFileTypeError
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)

# Config
MAX_UPLOAD_MB = float(os.getenv("MAX_UPLOAD_MB", "10"))


@router.post("/diary-photos")
async def upload_diary_photo(
    file: UploadFile = File(...),
    store: TaskStore = Depends(get_task_store),
    backend: BackendAPI = Depends(get_backend),
) -> dict:
    """Accept a diary photo or document and turn it into tasks."""
    start = time.time()
    data = await file.read()
    if len(data) > MAX_UPLOAD_MB * 1024 * 1024:
        REQUESTS_TOTAL.labels(endpoint="/diary-photos", status="rejected").inc()
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_MB:g} MB")

    try:
        result = await asyncio.to_thread(
            backend.submit_document,
            file.filename or "upload",
            file.content_type,
            data,
            store,
        )
    except UnsupportedFileTypeError as e:
        REQUESTS_TOTAL.labels(endpoint="/diary-photos", status="rejected").inc()
        raise HTTPException(status_code=415, detail=str(e))
    except OCRError as e:
        OCR_FAILURES_TOTAL.inc()
        REQUESTS_TOTAL.labels(endpoint="/diary-photos", status="error").inc()
        raise HTTPException(status_code=502, detail=str(e))
    except NoTextExtractedError as e:
        REQUESTS_TOTAL.labels(endpoint="/diary-photos", status="rejected").inc()
        raise HTTPException(status_code=422, detail=str(e))

    record_extraction("/diary-photos", result, store, start)
    return {"status": "processed", **result}


@router.get("/diary-photos")
async def list_diary_photos(store: TaskStore = Depends(get_task_store)) -> dict:
    photos = [p.model_dump(by_alias=True, mode="json") for p in store.diary_photos]
    return {"photos": photos, "total": len(photos)}
