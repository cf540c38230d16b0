from nutrireport.ocr.base import BaseTextExtractor
from nutrireport.ocr.factory import TextExtractorFactory
from nutrireport.ocr.openai_vision_adapter import OpenAIVisionAdapter
from nutrireport.ocr.tesseract_adapter import TesseractAdapter

__all__ = ["BaseTextExtractor", "OpenAIVisionAdapter", "TesseractAdapter", "TextExtractorFactory"]
