import io

import pytest
from PIL import Image

from nutrireport.ingestion.models import UploadCandidate
from nutrireport.ingestion.preview import build_preview


class TestBuildPreview:
    def test_renders_png_within_bounds(self, sample_jpeg_bytes: bytes) -> None:
        candidate = UploadCandidate.from_bytes(sample_jpeg_bytes, "label.jpg", "image/jpeg")

        preview = build_preview(candidate, max_size=(160, 40))

        with Image.open(io.BytesIO(preview)) as image:
            assert image.format == "PNG"
            assert image.width <= 160
            assert image.height <= 40

    def test_keeps_aspect_ratio(self, sample_png_bytes: bytes) -> None:
        candidate = UploadCandidate.from_bytes(sample_png_bytes, "label.png", "image/png")

        with Image.open(io.BytesIO(build_preview(candidate, max_size=(160, 160)))) as image:
            assert image.size == (160, 60)

    def test_raises_for_unreadable_image(self) -> None:
        candidate = UploadCandidate.from_bytes(b"garbage", "label.png", "image/png")

        with pytest.raises(ValueError, match="Cannot preview label.png"):
            build_preview(candidate)
