from datetime import timedelta

import pytest

from diary_planner.errors import NoTextExtractedError
from extraction.task_extractor import FALLBACK_TITLE, TaskExtractor


def test_returns_parsed_tasks(now):
    tasks = TaskExtractor().extract("Math homework due tomorrow\nRead chapter 2", now=now)
    assert [t.title for t in tasks] == ["Math Homework", "Read General Chapter 2"]


def test_fallback_task_when_nothing_matches(now):
    text = "Clean your room\nWalk the dog"
    (task,) = TaskExtractor().extract(text, now=now)
    assert task.title == FALLBACK_TITLE
    assert task.subject == "General"
    assert task.description == text
    assert task.due_date == now + timedelta(days=7)
    assert task.priority == "medium"
    assert task.estimated_time == 60
    assert task.created_from == "diary"


def test_fallback_description_is_capped(now):
    text = "x" * 250
    (task,) = TaskExtractor().extract(text, now=now)
    assert task.description == "x" * 200 + "..."


@pytest.mark.parametrize("text", ["", "   \n\t "])
def test_blank_text_is_rejected(text):
    with pytest.raises(NoTextExtractedError):
        TaskExtractor().extract(text)


def test_uses_injected_parser(now):
    class FakeParser:
        def parse_text(self, text, now=None):
            return []

    (task,) = TaskExtractor(parser=FakeParser()).extract("Math homework", now=now)
    assert task.title == FALLBACK_TITLE
