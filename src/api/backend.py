import logging
from datetime import datetime
from typing import Optional

from extraction.prompt_parser import PromptParser
from extraction.task_extractor import FALLBACK_TITLE, TaskExtractor
from ingestion.document_processor import DocumentProcessor
from storage.task_store import SUBJECTS, TaskStore

logger = logging.getLogger(__name__)


class BackendAPI:
    """Central orchestration component: text or upload in, stored tasks out."""

    def __init__(
        self,
        extractor: Optional[TaskExtractor] = None,
        document_processor: Optional[DocumentProcessor] = None,
        prompt_parser: Optional[PromptParser] = None,
    ):
        self.extractor = extractor or TaskExtractor()
        self.document_processor = document_processor or DocumentProcessor()
        self.prompt_parser = prompt_parser or PromptParser(s.name for s in SUBJECTS)

    def submit_notes(self, notes: str, store: TaskStore, now: Optional[datetime] = None) -> dict:
        """Extract tasks from typed or recognised text and add them to the store."""
        tasks = self.extractor.extract(notes, now=now)
        stored = store.add_many(tasks)
        return {
            "tasks": [t.to_public_dict() for t in stored],
            "tasks_processed": len(stored),
            "fallback": _is_fallback(stored),
        }

    def submit_prompt(self, prompt: str, store: TaskStore, now: Optional[datetime] = None) -> dict:
        """Turn deadline sentences into one stored task per line."""
        stored = store.add_many(self.prompt_parser.parse(prompt, now=now))
        return {
            "tasks": [t.to_public_dict() for t in stored],
            "tasks_processed": len(stored),
            "fallback": False,
        }

    def submit_document(
        self,
        file_name: str,
        content_type: Optional[str],
        data: bytes,
        store: TaskStore,
        now: Optional[datetime] = None,
    ) -> dict:
        """Decode an upload, extract its tasks and record it as a diary photo."""
        document = self.document_processor.process(file_name, content_type, data)
        if document.placeholder:
            photo = store.record_photo(file_name, [])
            logger.info(f"No text decoded from {file_name!r}, nothing extracted")
            return {
                "photo_id": photo.id,
                "file_type": document.file_type,
                "tasks": [],
                "tasks_processed": 0,
                "fallback": False,
                "message": document.text,
            }

        tasks = self.extractor.extract(document.text, now=now)
        stored = store.add_many(tasks)
        photo = store.record_photo(file_name, stored)
        logger.info(f"Stored {len(stored)} task(s) from {file_name!r}")
        return {
            "photo_id": photo.id,
            "file_type": document.file_type,
            "tasks": [t.to_public_dict() for t in stored],
            "tasks_processed": len(stored),
            "fallback": _is_fallback(stored),
        }


def _is_fallback(tasks: list) -> bool:
    return len(tasks) == 1 and tasks[0].title == FALLBACK_TITLE and tasks[0].id.startswith("review_")
