from datetime import datetime, timedelta

import pytest

from diary_planner.models import Task


def test_math_homework_line(parser, now):
    line = "Math homework due tomorrow chapter 5"
    info = parser.extract_task_info(line, now=now)
    assert info.task_type == "homework"

    tasks = parser.parse_text(line, now=now)
    assert len(tasks) == 1
    task = tasks[0]
    assert task.subject == "Math"
    assert task.priority == "high"
    assert task.due_date == now + timedelta(days=1)
    assert task.estimated_time == 60
    assert task.title == "Math Homework"
    assert task.description == line
    assert task.completed is False
    assert task.created_from == "diary"
    assert task.id.startswith("ocr_") and task.id.endswith("_0")


def test_chores_are_not_tasks(parser, now):
    assert parser.is_task_line("Clean your room") is False
    assert parser.parse_text("Clean your room", now=now) == []


def test_relative_phrase_wins_over_numeric_date(parser, now):
    (task,) = parser.parse_text("Essay due 12/25 next week", now=now)
    assert task.due_date == now + timedelta(days=7)


def test_chapter_range(parser, now):
    (task,) = parser.parse_text("Read chapter 3-5 for history", now=now)
    assert task.subject == "History"
    assert "Chapter 3-5" in task.title
    assert "chapter 3-5" in task.description
    assert task.priority == "low"
    assert task.estimated_time == 45
    # the chapter range also reads as the date 3-5
    assert task.due_date == datetime(2026, 3, 5)


@pytest.mark.parametrize("line,minutes", [
    ("Math test, 2 hours", 120),
    ("Read 30 minutes", 30),
])
def test_time_unit_conversion(parser, now, line, minutes):
    (task,) = parser.parse_text(line, now=now)
    assert task.estimated_time == minutes


def test_zero_duration_uses_default(parser, now):
    (task,) = parser.parse_text("Read 0 minutes", now=now)
    assert task.estimated_time == 60


def test_multiple_lines_keep_order_and_unique_ids(parser, now):
    text = (
        "Math homework due tomorrow\n"
        "Clean your room\n"
        "Science lab report next friday\n"
        "Math homework due tomorrow\n"
    )
    tasks = parser.parse_text(text, now=now)

    assert [t.title for t in tasks] == [
        "Math Homework",
        "Science lab report next friday",
        "Math Homework",
    ]
    assert len({t.id for t in tasks}) == 3
    assert [t.id.rsplit("_", 1)[1] for t in tasks] == ["0", "2", "3"]

    lab = tasks[1]
    assert lab.subject == "Science"
    assert lab.priority == "medium"
    assert lab.estimated_time == 90
    assert lab.due_date == now + timedelta(days=2)


@pytest.mark.parametrize("line", [
    "Finish",
    "due.",
    "Page 42 !!",
    "Chemistry experiment with the whole class in the big lab room downstairs",
    "lab: ???? ----",
    "quiz",
])
def test_every_task_line_yields_a_complete_task(parser, now, line):
    tasks = parser.parse_text(line, now=now)
    assert len(tasks) == 1
    task = tasks[0]
    assert isinstance(task, Task)
    assert task.title.strip()
    assert len(task.title) <= 50
    assert task.subject
    assert task.description
    assert task.due_date is not None
    assert task.priority in {"low", "medium", "high"}
    assert task.estimated_time > 0


def test_noise_only_input_yields_nothing(parser, now):
    assert parser.parse_text("", now=now) == []
    assert parser.parse_text("@@@ ### ***", now=now) == []


def test_uses_current_time_by_default(parser):
    before = datetime.now()
    (task,) = parser.parse_text("Math homework")
    assert task.due_date >= before + timedelta(days=7)
