from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Iterable, List, Optional

from diary_planner.errors import TaskNotFoundError
from diary_planner.models import DiaryPhoto, Subject, Task, TaskUpdate

SUBJECTS: List[Subject] = [
    Subject(id="1", name="Mathematics", color="#3B82F6"),
    Subject(id="2", name="Science", color="#10B981"),
    Subject(id="3", name="English", color="#8B5CF6"),
    Subject(id="4", name="History", color="#F59E0B"),
    Subject(id="5", name="Art", color="#EF4444"),
    Subject(id="6", name="Physics", color="#06B6D4"),
    Subject(id="7", name="Chemistry", color="#84CC16"),
    Subject(id="8", name="Biology", color="#F97316"),
    Subject(id="9", name="Geography", color="#EC4899"),
    Subject(id="10", name="General", color="#6B7280"),
]


def _clock_id() -> str:
    return str(time.time_ns() // 1_000_000)


def _suffixed(base_id: str, taken) -> str:
    # two calls in the same millisecond can produce equal ids
    candidate, n = base_id, 1
    while candidate in taken:
        candidate = f"{base_id}_{n}"
        n += 1
    return candidate


class TaskStore:
    """Session task list. Lives in process memory only, nothing is persisted."""

    def __init__(self):
        self._tasks: "OrderedDict[str, Task]" = OrderedDict()
        self._photos: List[DiaryPhoto] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._tasks)

    def _unique_id(self, task_id: str) -> str:
        return _suffixed(task_id, self._tasks)

    def add(self, task: Task) -> Task:
        with self._lock:
            task_id = self._unique_id(task.id)
            if task_id != task.id:
                task = task.model_copy(update={"id": task_id})
            self._tasks[task_id] = task
            return task

    def add_many(self, tasks: Iterable[Task]) -> List[Task]:
        return [self.add(t) for t in tasks]

    def create(self, **fields) -> Task:
        """Manual task creation; id and origin are filled in when missing."""
        fields.setdefault("id", _clock_id())
        if "createdFrom" not in fields:
            fields.setdefault("created_from", "manual")
        return self.add(Task(**fields))

    def get(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(task_id) from None

    def list(
        self,
        completed: Optional[bool] = None,
        subject: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> List[Task]:
        tasks = list(self._tasks.values())
        if completed is not None:
            tasks = [t for t in tasks if t.completed == completed]
        if subject:
            tasks = [t for t in tasks if t.subject.lower() == subject.lower()]
        if priority:
            tasks = [t for t in tasks if t.priority == priority]
        return tasks

    def update(self, task_id: str, updates: TaskUpdate) -> Task:
        with self._lock:
            current = self.get(task_id)
            changes = updates.model_dump(exclude_unset=True)
            # re-validate so bad values cannot slip in through model_copy
            merged = Task(**{**current.model_dump(), **changes})
            self._tasks[task_id] = merged
            return merged

    def delete(self, task_id: str) -> None:
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            del self._tasks[task_id]

    def toggle_completion(self, task_id: str) -> Task:
        with self._lock:
            task = self.get(task_id)
            toggled = task.model_copy(update={"completed": not task.completed})
            self._tasks[task_id] = toggled
            return toggled

    def record_photo(self, image_name: str, tasks: List[Task]) -> DiaryPhoto:
        with self._lock:
            photo_id = _suffixed(_clock_id(), {p.id for p in self._photos})
            photo = DiaryPhoto(id=photo_id, image_name=image_name, extracted_tasks=tasks)
            self._photos.append(photo)
        return photo

    @property
    def diary_photos(self) -> List[DiaryPhoto]:
        return list(self._photos)

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
            self._photos.clear()
