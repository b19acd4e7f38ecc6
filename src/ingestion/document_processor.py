"""
Upload handling: turns an uploaded file into text the task extractor can read.

Images go through OCR, plain text is decoded as UTF-8. PDF and Word files are
acknowledged with an explanatory placeholder message because their decoding
is done elsewhere; placeholders carry no tasks. Any other type is rejected.
"""
import logging
from pathlib import Path
from typing import Optional

from diary_planner.errors import UnsupportedFileTypeError
from diary_planner.models import DocumentResult
from ocr.ocr_client import OCRClient

logger = logging.getLogger(__name__)

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_SUFFIXES = {".txt", ".md"}


class DocumentProcessor:
    def __init__(self, ocr_client: Optional[OCRClient] = None):
        self.ocr_client = ocr_client or OCRClient()

    def process(self, file_name: str, content_type: Optional[str], data: bytes) -> DocumentResult:
        content_type = (content_type or "").lower()
        suffix = Path(file_name or "").suffix.lower()
        logger.info(f"Processing upload {file_name!r} ({content_type or 'unknown type'})")

        if content_type.startswith("image/"):
            result = self.ocr_client.extract_text(data)
            return DocumentResult(text=result.text, file_name=file_name, file_type="image")

        if content_type == PDF_TYPE or suffix == ".pdf":
            return DocumentResult(
                text=self._pdf_message(file_name),
                file_name=file_name,
                file_type=PDF_TYPE,
                placeholder=True,
            )

        if content_type == DOCX_TYPE or suffix == ".docx":
            return DocumentResult(
                text=self._word_message(file_name),
                file_name=file_name,
                file_type=DOCX_TYPE,
                placeholder=True,
            )

        if content_type == "text/plain" or suffix in TEXT_SUFFIXES:
            text = data.decode("utf-8", errors="replace")
            return DocumentResult(text=text, file_name=file_name, file_type="text/plain")

        raise UnsupportedFileTypeError(content_type or suffix or "unknown")

    @staticmethod
    def _pdf_message(file_name: str) -> str:
        return (
            f'PDF file "{file_name}" uploaded. PDF text extraction requires server-side '
            "processing. Please convert to image format or use the camera to capture "
            "pages for OCR processing."
        )

    @staticmethod
    def _word_message(file_name: str) -> str:
        return (
            f'Word document "{file_name}" uploaded. Word document processing requires '
            "server-side implementation. Please save as text file or convert to image "
            "format for processing."
        )
