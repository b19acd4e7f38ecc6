from __future__ import annotations

import io
import os
import shlex

import pytesseract
from PIL import Image

from diary_planner.models import BoundingBox, OCRResult, OCRWord
from ocr.providers.base import OCRProvider

# Characters a diary line can reasonably contain
CHAR_WHITELIST = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    ".,!?:;-()[]{}\"' "
)


class TesseractProvider(OCRProvider):
    def __init__(self, lang: str | None = None):
        self.lang = lang or os.getenv("OCR_LANG", "eng")
        # psm 6: treat the page as a single uniform block of text
        # pytesseract splits config shell-style, so the whitelist is quoted
        self.config = (
            "--psm 6 -c preserve_interword_spaces=1 "
            f"-c {shlex.quote('tessedit_char_whitelist=' + CHAR_WHITELIST)}"
        )

    def recognize(self, image: bytes) -> OCRResult:
        with Image.open(io.BytesIO(image)) as img:
            text = pytesseract.image_to_string(img, lang=self.lang, config=self.config)
            data = pytesseract.image_to_data(
                img,
                lang=self.lang,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )

        words = []
        for i, token in enumerate(data.get("text", [])):
            conf = float(data["conf"][i])
            if not token.strip() or conf < 0:
                continue
            left, top = int(data["left"][i]), int(data["top"][i])
            words.append(
                OCRWord(
                    text=token,
                    confidence=conf,
                    bbox=BoundingBox(
                        x0=left,
                        y0=top,
                        x1=left + int(data["width"][i]),
                        y1=top + int(data["height"][i]),
                    ),
                )
            )

        confidence = sum(w.confidence for w in words) / len(words) if words else 0.0
        return OCRResult(text=text.strip(), confidence=confidence, words=words)
