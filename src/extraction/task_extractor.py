import logging
from datetime import datetime, timedelta
from typing import List, Optional

from diary_planner.errors import NoTextExtractedError
from diary_planner.models import (
    DEFAULT_DUE_IN_DAYS,
    DEFAULT_ESTIMATED_TIME_MIN,
    Task,
)
from extraction.task_parser import TaskParser

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Review extracted content"
FALLBACK_DESCRIPTION_CHARS = 200


class TaskExtractor:
    """Runs the parser over recognised text and guarantees a non-empty result."""

    def __init__(self, parser: Optional[TaskParser] = None):
        self.parser = parser or TaskParser()

    def extract(self, text: str, now: Optional[datetime] = None) -> List[Task]:
        if not text or not text.strip():
            raise NoTextExtractedError("No text could be extracted from the input")

        now = now or datetime.now()
        tasks = self.parser.parse_text(text, now=now)
        if tasks:
            return tasks

        logger.info("No task lines detected, creating a review task for the raw text")
        return [self.fallback_task(text, now=now)]

    @staticmethod
    def fallback_task(text: str, now: Optional[datetime] = None) -> Task:
        now = now or datetime.now()
        description = text[:FALLBACK_DESCRIPTION_CHARS]
        if len(text) > FALLBACK_DESCRIPTION_CHARS:
            description += "..."

        return Task(
            id=f"review_{int(now.timestamp() * 1000)}",
            title=FALLBACK_TITLE,
            subject="General",
            description=description,
            due_date=now + timedelta(days=DEFAULT_DUE_IN_DAYS),
            priority="medium",
            estimated_time=DEFAULT_ESTIMATED_TIME_MIN,
            completed=False,
            created_from="diary",
        )
