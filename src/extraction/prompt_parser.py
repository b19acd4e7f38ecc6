"""
Deadline prompts: short free-form sentences such as "English essay due in 3
days, 1500 words" typed by the student instead of photographed.

Every non-blank line becomes exactly one task. Unlike diary lines there is no
task keyword filter; the line itself is the request.
"""
from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from diary_planner.errors import NoTextExtractedError
from diary_planner.models import DEFAULT_DUE_IN_DAYS, DEFAULT_ESTIMATED_TIME_MIN, Task
from extraction.keywords import WEEKDAYS, days_until_weekday

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "General"
TODAY_OFFSET = timedelta(hours=2)

HIGH_PRIORITY_WORDS = ("urgent", "important", "tomorrow")
LOW_PRIORITY_WORDS = ("easy", "simple")

# First matching group wins
PROMPT_TIME_ESTIMATES: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("test", "exam"), 120),
    (("essay", "project"), 180),
    (("read",), 45),
    (("presentation",), 90),
)

_DAYS = re.compile(r"(\d+) days?")
_CHAPTERS = re.compile(r"chapters? ([\d\-,\s]+)", re.IGNORECASE)
_WORDS = re.compile(r"(\d+)\s*words?", re.IGNORECASE)


class PromptParser:
    def __init__(self, subjects: Iterable[str]):
        self.subjects = tuple(subjects)

    def parse(self, text: str, now: Optional[datetime] = None) -> List[Task]:
        if not text or not text.strip():
            raise NoTextExtractedError("Prompt is empty")

        now = now or datetime.now()
        seed = time.time_ns() // 1_000_000
        lines = [line for line in text.split("\n") if line.strip()]
        tasks = [self.parse_line(line, index, now=now, seed=seed) for index, line in enumerate(lines)]
        logger.info(f"Generated {len(tasks)} task(s) from deadline prompt")
        return tasks

    def parse_line(
        self,
        line: str,
        index: int,
        now: Optional[datetime] = None,
        seed: Optional[int] = None,
    ) -> Task:
        now = now or datetime.now()
        if seed is None:
            seed = time.time_ns() // 1_000_000

        lower_line = line.lower()
        subject = self.extract_subject(lower_line)
        title, description = self.compose(line, subject)
        return Task(
            id=f"prompt_{seed}_{index}",
            title=title,
            subject=subject,
            description=description,
            due_date=self.extract_due_date(lower_line, now=now),
            priority=self.extract_priority(lower_line),
            estimated_time=self.extract_estimated_time(lower_line),
            completed=False,
            created_from="prompt",
        )

    def extract_subject(self, line: str) -> str:
        """The last palette subject named in the line."""
        line = line.lower()
        subject = DEFAULT_SUBJECT
        for name in self.subjects:
            if name.lower() in line:
                subject = name
        return subject

    @staticmethod
    def extract_due_date(line: str, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now()
        line = line.lower()

        if "tomorrow" in line:
            return now + timedelta(days=1)
        if "today" in line:
            return now + TODAY_OFFSET
        if "next week" in line:
            return now + timedelta(days=7)

        match = _DAYS.search(line)
        if match:
            try:
                return now + timedelta(days=int(match.group(1)))
            except OverflowError:
                logger.debug("Ignoring out of range offset %r", match.group(0))

        for name in ("friday", "monday"):
            if f"next {name}" in line:
                return now + timedelta(days=days_until_weekday(now.date(), WEEKDAYS.index(name)))

        return now + timedelta(days=DEFAULT_DUE_IN_DAYS)

    @staticmethod
    def extract_priority(line: str) -> str:
        line = line.lower()
        if any(word in line for word in HIGH_PRIORITY_WORDS):
            return "high"
        if any(word in line for word in LOW_PRIORITY_WORDS):
            return "low"
        return "medium"

    @staticmethod
    def extract_estimated_time(line: str) -> int:
        line = line.lower()
        for keywords, minutes in PROMPT_TIME_ESTIMATES:
            if any(keyword in line for keyword in keywords):
                return minutes
        return DEFAULT_ESTIMATED_TIME_MIN

    @staticmethod
    def compose(line: str, subject: str) -> Tuple[str, str]:
        """Title and description; unrecognised requests keep the line as the title."""
        lower_line = line.lower()
        title = line.strip()
        description = ""

        if "test" in lower_line or "exam" in lower_line:
            chapters = _CHAPTERS.search(line)
            if chapters:
                title = f"Study for {subject} test"
                description = f"Review chapters {chapters.group(1).strip(' ,')} and prepare for exam"

        elif "essay" in lower_line:
            words = _WORDS.search(line)
            title = f"Write {subject} essay"
            if words:
                description = f"Complete essay ({words.group(1)} words)"
            else:
                description = "Complete essay assignment"

        elif "project" in lower_line:
            title = f"Complete {subject} project"
            if "presentation" in lower_line:
                description = "Prepare project presentation and slides"
            else:
                description = "Work on project assignment"

        elif "assignment" in lower_line:
            title = f"{subject} assignment"
            if "read" in lower_line:
                description = "Complete reading and answer questions"
            else:
                description = "Complete assignment tasks"

        return title, description
