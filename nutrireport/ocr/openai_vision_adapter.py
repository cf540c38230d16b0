import base64
import io

import httpx
import openai
from PIL import Image, UnidentifiedImageError

from nutrireport.ingestion.exceptions import OcrError
from nutrireport.ocr.base import BaseTextExtractor

SYSTEM_PROMPT = (
    "You transcribe photographed nutrition reports. Return only the text that is "
    "visible in the image, line by line, without commentary. If the image contains "
    "no readable text, return an empty response."
)


class OpenAIVisionAdapter(BaseTextExtractor):
    """Recognizes text through an OpenAI-compatible vision chat model."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        language: str = "eng",
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._language = language

    def extract(self, image_bytes: bytes) -> str:
        data_url = self._to_data_url(image_bytes)
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "text",
                                "text": f"Transcribe this report. Language hint: {self._language}.",
                            },
                            {"type": "image_url", "image_url": {"url": data_url}},
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise OcrError(f"OCR failed: provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise OcrError(f"OCR failed: provider API error: {exc}") from exc

        if not response.choices:
            raise OcrError("OCR failed: provider returned no choices")
        return (response.choices[0].message.content or "").strip()

    def _to_data_url(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image_format = (image.format or "png").lower()
        except (UnidentifiedImageError, OSError) as exc:
            raise OcrError(f"OCR failed: unreadable image: {exc}") from exc
        encoded = base64.b64encode(image_bytes).decode("ascii")
        return f"data:image/{image_format};base64,{encoded}"
