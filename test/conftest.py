from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from extraction.task_parser import TaskParser
from ocr.ocr_client import OCRClient
from ocr.providers.base import OCRProvider
from diary_planner.models import OCRResult
from storage.task_store import TaskStore

# Wednesday morning
REFERENCE_NOW = datetime(2026, 3, 4, 10, 30)


class FakeOCRProvider(OCRProvider):
    def __init__(self, text: str = "", error: Exception = None):
        self._text = text
        self._error = error

    def recognize(self, image: bytes) -> OCRResult:
        if self._error is not None:
            raise self._error
        return OCRResult(text=self._text, confidence=88.0)


@pytest.fixture
def now():
    return REFERENCE_NOW


@pytest.fixture
def parser():
    return TaskParser()


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def fake_ocr_factory():
    def _make(text: str = "", error: Exception = None):
        return OCRClient(provider=FakeOCRProvider(text=text, error=error))
    return _make


@pytest.fixture
def client_factory(store):
    """TestClient wired to a fresh store and a backend built from the given OCR client."""
    from api.main import app
    from api.backend import BackendAPI
    from api.dependencies import get_backend, get_task_store
    from ingestion.document_processor import DocumentProcessor

    def _make(ocr_client: OCRClient = None):
        backend = BackendAPI(document_processor=DocumentProcessor(ocr_client or OCRClient(FakeOCRProvider())))
        app.dependency_overrides[get_task_store] = lambda: store
        app.dependency_overrides[get_backend] = lambda: backend
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
