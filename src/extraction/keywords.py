"""
Lookup tables for the diary task parser.

Everything here is read-only: tuples for ordered keyword lists and
MappingProxyType for keyword groups. Iteration order is significant, the
first entry that matches wins wherever these tables are scanned.
"""
from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Mapping, Tuple


SUBJECTS: Tuple[str, ...] = (
    "mathematics", "math", "maths", "algebra", "geometry", "calculus",
    "science", "physics", "chemistry", "biology", "bio",
    "english", "literature", "writing", "essay", "reading",
    "history", "social studies", "geography", "civics",
    "art", "drawing", "painting", "music",
    "computer science", "programming", "coding",
    "physical education", "pe", "sports",
    "french", "spanish", "german", "language",
)

TASK_INDICATORS: Tuple[str, ...] = (
    "homework", "assignment", "due", "test", "exam", "quiz",
    "essay", "project", "read", "study", "complete", "finish",
    "chapter", "page", "exercise", "problem", "lab", "report",
)

PRIORITY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "high": ("urgent", "important", "asap", "priority", "due tomorrow", "test", "exam", "quiz"),
    "medium": ("assignment", "homework", "project", "essay", "report"),
    "low": ("read", "review", "practice", "optional", "extra credit"),
})

TASK_TYPE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "test": ("test", "exam", "quiz", "assessment"),
    "essay": ("essay", "paper", "composition", "writing"),
    "project": ("project", "presentation", "research"),
    "homework": ("homework", "assignment", "exercises", "problems"),
    "reading": ("read", "chapter", "pages", "book"),
    "lab": ("lab", "experiment", "practical"),
})

# (keywords, minutes) checked in order when no explicit duration is written
TIME_ESTIMATES: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("test", "exam"), 120),
    (("essay", "project"), 180),
    (("read",), 45),
    (("homework", "assignment"), 60),
    (("lab", "experiment"), 90),
)

TITLE_STOP_WORDS = frozenset({"the", "and", "for", "due", "on"})

# Monday first, matching date.weekday()
WEEKDAYS: Tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

FIXED_DAY_OFFSETS: Tuple[Tuple[str, int], ...] = (
    ("today", 0),
    ("tomorrow", 1),
    ("day after tomorrow", 2),
    ("next week", 7),
)


def days_until_weekday(today: date, target_weekday: int) -> int:
    """Days until the next occurrence of ``target_weekday``; a full week if it is today."""
    days = (target_weekday - today.weekday()) % 7
    return days or 7


def weekday_offsets(today: date) -> Tuple[int, ...]:
    return tuple(days_until_weekday(today, wd) for wd in range(len(WEEKDAYS)))


def build_time_keywords(today: date) -> Mapping[str, int]:
    """Relative-date phrase -> day offset, in match order.

    Weekday offsets depend on ``today`` so the table is rebuilt for each
    reference date instead of being frozen at import time.
    """
    offsets = weekday_offsets(today)
    table = dict(FIXED_DAY_OFFSETS)
    for name, days in zip(WEEKDAYS, offsets):
        table[f"next {name}"] = days
    return MappingProxyType(table)
