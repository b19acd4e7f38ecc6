from __future__ import annotations
from abc import ABC, abstractmethod

from diary_planner.models import OCRResult


class OCRProvider(ABC):
    @abstractmethod
    def recognize(self, image: bytes) -> OCRResult:
        """
        Must return the recognised text with its confidence metadata.
        Raising is fine; OCRClient turns any failure into OCRError.
        """
        raise NotImplementedError
