import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_task_store
from api.metrics import TASKS_STORED
from diary_planner.errors import TaskNotFoundError
from diary_planner.models import Priority, TaskUpdate, default_due_date
from storage.task_store import SUBJECTS, TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


class CreateTaskIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    subject: str = "General"
    description: str = ""
    due_date: datetime = Field(default_factory=default_due_date, alias="dueDate")
    priority: Priority = "medium"
    estimated_time: int = Field(60, alias="estimatedTime")
    scheduled_time: Optional[datetime] = Field(None, alias="scheduledTime")


def _not_found(e: TaskNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.get("/tasks")
async def get_tasks(
    completed: Optional[bool] = None,
    subject: Optional[str] = None,
    priority: Optional[Priority] = None,
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """List session tasks, optionally filtered."""
    tasks = store.list(completed=completed, subject=subject, priority=priority)
    return {
        "tasks": [t.to_public_dict() for t in tasks],
        "total": len(tasks),
    }


@router.post("/tasks", status_code=201)
async def create_task(payload: CreateTaskIn, store: TaskStore = Depends(get_task_store)) -> dict:
    try:
        task = store.create(**payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    TASKS_STORED.set(len(store))
    logger.info(f"Created manual task {task.id}")
    return task.to_public_dict()


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> dict:
    try:
        return store.get(task_id).to_public_dict()
    except TaskNotFoundError as e:
        raise _not_found(e)


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
) -> dict:
    try:
        return store.update(task_id, payload).to_public_dict()
    except TaskNotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/tasks/{task_id}/toggle")
async def toggle_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> dict:
    try:
        return store.toggle_completion(task_id).to_public_dict()
    except TaskNotFoundError as e:
        raise _not_found(e)


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> dict:
    try:
        store.delete(task_id)
    except TaskNotFoundError as e:
        raise _not_found(e)
    TASKS_STORED.set(len(store))
    return {"status": "deleted", "id": task_id}


@router.get("/subjects")
async def get_subjects() -> dict:
    return {"subjects": [s.model_dump() for s in SUBJECTS]}
