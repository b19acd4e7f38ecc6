import logging
import os
from typing import Optional

from diary_planner.errors import OCRError
from diary_planner.models import OCRResult
from ocr.providers.base import OCRProvider

logger = logging.getLogger(__name__)


def _default_provider() -> OCRProvider:
    name = os.getenv("OCR_PROVIDER", "tesseract").lower()
    if name == "mock":
        from ocr.providers.mock_provider import MockProvider

        return MockProvider()
    if name == "tesseract":
        from ocr.providers.tesseract_provider import TesseractProvider

        return TesseractProvider()
    raise ValueError(f"Unknown OCR_PROVIDER: {name}")


class OCRClient:
    """Thin wrapper around an OCR provider.

    The provider is resolved lazily from OCR_PROVIDER so importing the API
    does not require the tesseract binary.
    """

    def __init__(self, provider: Optional[OCRProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> OCRProvider:
        if self._provider is None:
            self._provider = _default_provider()
        return self._provider

    def extract_text(self, image: bytes) -> OCRResult:
        try:
            result = self.provider.recognize(image)
        except Exception as e:
            logger.error(f"OCR failed: {e}")
            raise OCRError("Failed to extract text from image") from e

        logger.info(
            f"OCR finished: {len(result.words)} words, confidence {result.confidence:.1f}"
        )
        return result.model_copy(update={"text": result.text.strip()})
