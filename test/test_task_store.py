import pytest

from diary_planner.errors import TaskNotFoundError
from diary_planner.models import Task, TaskUpdate
from storage.task_store import SUBJECTS


def _task(task_id: str, **kw) -> Task:
    return Task(id=task_id, title=kw.pop("title", f"Task {task_id}"), **kw)


def test_add_and_get(store):
    store.add(_task("a"))
    assert store.get("a").title == "Task a"
    assert len(store) == 1


def test_duplicate_ids_are_made_unique(store):
    first = store.add(_task("ocr_1_0"))
    second = store.add(_task("ocr_1_0"))
    assert first.id == "ocr_1_0"
    assert second.id == "ocr_1_0_1"
    assert len(store) == 2


def test_create_manual_task(store):
    task = store.create(title="Practice piano", estimated_time=30)
    assert task.created_from == "manual"
    assert store.get(task.id) == task


def test_list_filters(store):
    store.add_many([
        _task("a", subject="Math", priority="high"),
        _task("b", subject="History", priority="low", completed=True),
        _task("c", subject="Math", priority="low"),
    ])
    assert [t.id for t in store.list()] == ["a", "b", "c"]
    assert [t.id for t in store.list(completed=False)] == ["a", "c"]
    assert [t.id for t in store.list(subject="math")] == ["a", "c"]
    assert [t.id for t in store.list(priority="low", completed=False)] == ["c"]


def test_update_merges_fields(store):
    store.add(_task("a"))
    updated = store.update("a", TaskUpdate(priority="high", estimated_time=15))
    assert updated.priority == "high"
    assert updated.estimated_time == 15
    assert updated.title == "Task a"


def test_update_revalidates(store):
    store.add(_task("a"))
    with pytest.raises(Exception):
        store.update("a", TaskUpdate(title=None))
    assert store.get("a").title == "Task a"


def test_toggle_completion(store):
    store.add(_task("a"))
    assert store.toggle_completion("a").completed is True
    assert store.toggle_completion("a").completed is False


def test_delete(store):
    store.add(_task("a"))
    store.delete("a")
    assert len(store) == 0


@pytest.mark.parametrize("op", ["get", "delete", "toggle_completion"])
def test_unknown_id(store, op):
    with pytest.raises(TaskNotFoundError):
        getattr(store, op)("missing")


def test_record_photo(store):
    tasks = store.add_many([_task("a")])
    photo = store.record_photo("page1.jpg", tasks)
    assert photo.processed is True
    assert store.diary_photos == [photo]
    store.clear()
    assert store.diary_photos == []
    assert len(store) == 0


def test_subject_palette_ends_with_general():
    assert SUBJECTS[-1].name == "General"
    assert len({s.id for s in SUBJECTS}) == len(SUBJECTS)


def test_photos_recorded_in_the_same_millisecond_get_distinct_ids(store, monkeypatch):
    monkeypatch.setattr("storage.task_store._clock_id", lambda: "1700000000000")
    first = store.record_photo("page1.jpg", [])
    second = store.record_photo("page2.jpg", [])
    third = store.record_photo("page3.jpg", [])
    assert [first.id, second.id, third.id] == [
        "1700000000000", "1700000000000_1", "1700000000000_2",
    ]
