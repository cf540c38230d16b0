import io

import pytesseract
from PIL import Image

from nutrireport.ingestion.exceptions import OcrError
from nutrireport.ocr.base import BaseTextExtractor


class TesseractAdapter(BaseTextExtractor):
    """Recognizes text with the Tesseract engine."""

    def __init__(self, language: str = "eng", tesseract_cmd: str = "") -> None:
        self._language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                text = pytesseract.image_to_string(image, lang=self._language)
        except Exception as exc:
            raise OcrError(f"OCR failed: {exc}") from exc
        return text.strip()
