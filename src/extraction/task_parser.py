"""
Rule-based task extraction for homework diary text.

Turns a block of recognised text into Task records: the text is cleaned and
split into lines, lines without a task keyword are dropped, and each
remaining line goes through five independent field extractors (subject, due
date, priority, estimated time, task type) before a title and description
are composed from the results.

Everything here is deterministic and keyword driven. All tables are
read-only and no state is kept between calls, so a single TaskParser can be
shared across threads.
"""
from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from classification.task_classifier import TaskClassifier
from diary_planner.models import (
    DEFAULT_DUE_IN_DAYS,
    DEFAULT_ESTIMATED_TIME_MIN,
    Task,
)
from extraction.keywords import (
    PRIORITY_KEYWORDS,
    SUBJECTS,
    TIME_ESTIMATES,
    TITLE_STOP_WORDS,
    build_time_keywords,
)

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "General"
DEFAULT_PRIORITY = "medium"
MAX_TITLE_LENGTH = 50
ELLIPSIS = "..."
MAX_TITLE_WORDS = 6
MIN_LINE_LENGTH = 4

# Preprocessing
_DISALLOWED_CHARS = re.compile(r"[^\w\s\-.,!?:;()\[\]{}'\"]")
_BREAKING_WHITESPACE = re.compile(r"\s*[\r\n]\s*")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")

# Due dates
_IN_DAYS = re.compile(r"in (\d+) days?")
_DATE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?"),    # MM/DD[/YY]
    re.compile(r"(\d{1,2})-(\d{1,2})(?:-(\d{2,4}))?"),    # MM-DD[-YY]
    re.compile(r"(\d{1,2})\.(\d{1,2})(?:\.(\d{2,4}))?"),  # MM.DD[.YY]
)

# Durations
_EXPLICIT_DURATION = re.compile(r"(\d+)\s*(minutes?|mins?|hours?|hrs?)")

# Title synthesis; a number or a dash joined range such as 3-5
_CHAPTER = re.compile(r"chapter\s*(\d+(?:-\d+)?)", re.IGNORECASE)
_PAGES = re.compile(r"pages?\s*(\d+(?:-\d+)?)", re.IGNORECASE)
_PROBLEMS = re.compile(r"problems?\s*(\d+(?:-\d+)?)", re.IGNORECASE)
_EXERCISES = re.compile(r"exercises?\s*(\d+(?:-\d+)?)", re.IGNORECASE)


@dataclass(frozen=True)
class TaskInfo:
    """Fields inferred from a single diary line."""

    subject: str
    due_date: datetime
    priority: str
    estimated_time: int
    task_type: str


def truncate_title(text: str) -> str:
    if len(text) > MAX_TITLE_LENGTH:
        return text[: MAX_TITLE_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return text


def _title_case(phrase: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split(" "))


def _expand_year(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    year = int(raw)
    if len(raw) == 2:
        year += 2000
    return year


class TaskParser:
    def __init__(self, classifier: Optional[TaskClassifier] = None):
        self.classifier = classifier or TaskClassifier()

    # ── Pipeline ──────────────────────────────────────────────────────────

    def parse_text(self, text: str, now: Optional[datetime] = None) -> List[Task]:
        """Extract tasks from raw text, in the order their lines appear.

        ``now`` is the reference point for relative due dates and defaults to
        the current local time.
        """
        now = now or datetime.now()
        seed = time.time_ns() // 1_000_000

        tasks: List[Task] = []
        lines = self.preprocess(text)
        task_lines = self.classifier.classify(lines)
        logger.debug("%d of %d line(s) carry a task keyword", len(task_lines), len(lines))
        for index, line in task_lines:
            task = self.parse_task_line(line, index, now=now, seed=seed)
            if task is not None:
                tasks.append(task)

        logger.info(f"Extracted {len(tasks)} task(s) from {len(lines)} line(s)")
        return tasks

    def preprocess(self, raw_text: str) -> List[str]:
        cleaned = _DISALLOWED_CHARS.sub(" ", raw_text or "")
        cleaned = _BREAKING_WHITESPACE.sub("\n", cleaned)
        cleaned = _INLINE_WHITESPACE.sub(" ", cleaned).strip()

        lines = (line.strip() for line in cleaned.split("\n"))
        return [line for line in lines if len(line) >= MIN_LINE_LENGTH]

    def is_task_line(self, line: str) -> bool:
        return self.classifier.is_task_line(line)

    def parse_task_line(
        self,
        line: str,
        index: int,
        now: Optional[datetime] = None,
        seed: Optional[int] = None,
    ) -> Optional[Task]:
        now = now or datetime.now()
        if seed is None:
            seed = time.time_ns() // 1_000_000

        info = self.extract_task_info(line, now=now)
        title, description = self.synthesize(line, info)
        if not title:
            return None

        return Task(
            id=f"ocr_{seed}_{index}",
            title=title,
            subject=info.subject or DEFAULT_SUBJECT,
            description=description,
            due_date=info.due_date,
            priority=info.priority or DEFAULT_PRIORITY,
            estimated_time=info.estimated_time or DEFAULT_ESTIMATED_TIME_MIN,
            completed=False,
            created_from="diary",
        )

    def extract_task_info(self, line: str, now: Optional[datetime] = None) -> TaskInfo:
        lower_line = line.lower()
        return TaskInfo(
            subject=self.extract_subject(lower_line),
            due_date=self.extract_due_date(lower_line, now=now),
            priority=self.extract_priority(lower_line),
            estimated_time=self.extract_estimated_time(lower_line),
            task_type=self.classifier.extract_task_type(lower_line),
        )

    # ── Field extractors ──────────────────────────────────────────────────

    def extract_subject(self, line: str) -> str:
        line = line.lower()
        for subject in SUBJECTS:
            if subject in line:
                return _title_case(subject)
        return DEFAULT_SUBJECT

    def extract_due_date(self, line: str, now: Optional[datetime] = None) -> datetime:
        """Resolve a due date. Relative phrases beat "in N days", which beats numeric dates."""
        now = now or datetime.now()
        line = line.lower()

        for keyword, days in build_time_keywords(now.date()).items():
            if keyword in line:
                return now + timedelta(days=days)

        match = _IN_DAYS.search(line)
        if match:
            try:
                return now + timedelta(days=int(match.group(1)))
            except OverflowError:
                logger.debug("Ignoring out of range offset %r", match.group(0))

        for pattern in _DATE_PATTERNS:
            match = pattern.search(line)
            if not match:
                continue
            candidate = self._date_from_match(match, now)
            # Past or impossible dates do not count; try the next format
            if candidate is not None and candidate > now:
                return candidate

        return now + timedelta(days=DEFAULT_DUE_IN_DAYS)

    @staticmethod
    def _date_from_match(match: re.Match, now: datetime) -> Optional[datetime]:
        month, day, year = match.group(1), match.group(2), match.group(3)
        try:
            return datetime(_expand_year(year, now.year), int(month), int(day))
        except ValueError:
            return None

    def extract_priority(self, line: str) -> str:
        line = line.lower()
        for priority, keywords in PRIORITY_KEYWORDS.items():
            if any(keyword in line for keyword in keywords):
                return priority
        return DEFAULT_PRIORITY

    def extract_estimated_time(self, line: str) -> int:
        """Minutes of work implied by the line."""
        line = line.lower()
        match = _EXPLICIT_DURATION.search(line)
        if match:
            value = int(match.group(1))
            unit = match.group(2)
            if unit.startswith("hour") or unit.startswith("hr"):
                return value * 60
            return value

        for keywords, minutes in TIME_ESTIMATES:
            if any(keyword in line for keyword in keywords):
                return minutes

        return DEFAULT_ESTIMATED_TIME_MIN

    def extract_task_type(self, line: str) -> str:
        return self.classifier.extract_task_type(line)

    # ── Title / description ───────────────────────────────────────────────

    def synthesize(self, line: str, info: TaskInfo) -> Tuple[str, str]:
        task_type = info.task_type
        subject = info.subject or DEFAULT_SUBJECT
        subject_lower = subject.lower()

        chapter = _CHAPTER.search(line)
        pages = _PAGES.search(line)
        problems = _PROBLEMS.search(line)
        exercises = _EXERCISES.search(line)

        title = ""
        description = line

        if task_type == "test":
            title = f"{subject} test"
            if chapter:
                title += f" - Chapter {chapter.group(1)}"
                description = f"Study for {subject_lower} test covering chapter {chapter.group(1)}"

        elif task_type == "essay":
            title = f"{subject} Essay"
            description = f"Write essay for {subject_lower}"

        elif task_type == "reading":
            title = f"Read {subject}"
            if chapter:
                title += f" Chapter {chapter.group(1)}"
                description = f"Read chapter {chapter.group(1)} for {subject_lower}"
            elif pages:
                title += f" Pages {pages.group(1)}"
                description = f"Read pages {pages.group(1)} for {subject_lower}"

        elif task_type == "homework":
            title = f"{subject} Homework"
            if problems:
                title += f" - Problems {problems.group(1)}"
                description = f"Complete problems {problems.group(1)} for {subject_lower}"
            elif exercises:
                title += f" - Exercises {exercises.group(1)}"
                description = f"Complete exercises {exercises.group(1)} for {subject_lower}"

        else:
            # project, lab: keep the most meaningful words of the line
            words = [
                word for word in line.split(" ")
                if len(word) > 2 and word.lower() not in TITLE_STOP_WORDS
            ]
            title = truncate_title(" ".join(words[:MAX_TITLE_WORDS]))

        if not title.strip():
            title = truncate_title(line)

        return title.strip(), description.strip()
