import pytest
from diary_planner.models import OCRResult, Task, TaskUpdate

def test_task_invalid_duration():
    with pytest.raises(Exception):
        Task(id="1", title="Bad", estimated_time=-5)

def test_task_zero_duration():
    with pytest.raises(Exception):
        Task(id="1", title="Bad", estimated_time=0)

def test_task_empty_title():
    with pytest.raises(Exception):
        Task(id="1", title="")

def test_task_blank_title():
    with pytest.raises(Exception):
        Task(id="1", title="   ")

def test_task_unknown_priority():
    with pytest.raises(Exception):
        Task(id="1", title="X", priority="critical")

def test_update_invalid_duration():
    with pytest.raises(Exception):
        TaskUpdate(estimated_time=0)

def test_ocr_confidence_out_of_range():
    with pytest.raises(Exception):
        OCRResult(text="x", confidence=140)
