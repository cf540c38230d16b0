from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all text recognition adapters."""

    @abstractmethod
    def extract(self, image_bytes: bytes) -> str:
        """Recognize text in an image.

        Args:
            image_bytes: Raw PNG or JPEG content.

        Returns:
            Recognized text, stripped. Empty string if nothing was recognized.

        Raises:
            OcrError: if recognition fails for any reason.
        """
