from __future__ import annotations

from diary_planner.models import BoundingBox, OCRResult, OCRWord
from ocr.providers.base import OCRProvider

SAMPLE_DIARY_PAGE = """Math homework problems 1-20 due tomorrow
Science lab report next friday
Read chapter 4 for history
English essay due in 5 days
"""


class MockProvider(OCRProvider):
    def __init__(self, text: str = SAMPLE_DIARY_PAGE, confidence: float = 91.0):
        self.text = text
        self.confidence = confidence

    def recognize(self, image: bytes) -> OCRResult:
        """
        Returns the canned page regardless of the image content.
        Word boxes are laid out on a fixed grid, one row per line.
        """
        words = []
        for row, line in enumerate(self.text.splitlines()):
            x = 0
            for token in line.split():
                width = 12 * len(token)
                words.append(
                    OCRWord(
                        text=token,
                        confidence=self.confidence,
                        bbox=BoundingBox(x0=x, y0=row * 30, x1=x + width, y1=row * 30 + 24),
                    )
                )
                x += width + 8
        return OCRResult(text=self.text, confidence=self.confidence, words=words)
