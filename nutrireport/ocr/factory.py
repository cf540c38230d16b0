from nutrireport.config.settings import Settings
from nutrireport.ocr.base import BaseTextExtractor
from nutrireport.ocr.openai_vision_adapter import OpenAIVisionAdapter
from nutrireport.ocr.tesseract_adapter import TesseractAdapter


class TextExtractorFactory:
    """Creates the recognition engine adapter selected in settings."""

    ENGINES = ("tesseract", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractAdapter(
                language=settings.ocr_language,
                tesseract_cmd=settings.tesseract_cmd,
            )
        if engine == "openai":
            return OpenAIVisionAdapter(
                api_key=settings.ocr_openai_api_key,
                model=settings.ocr_openai_model_name,
                timeout_seconds=settings.ocr_openai_timeout_seconds,
                base_url=settings.ocr_openai_base_url.strip() or None,
                language=settings.ocr_language,
            )
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}")
