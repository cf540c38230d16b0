import io

import pytest
from PIL import Image, ImageDraw


def _render(image_format: str, text: str | None) -> bytes:
    image = Image.new("RGB", (320, 120), "white")
    if text:
        ImageDraw.Draw(image).text((20, 50), text, fill="black")
    buf = io.BytesIO()
    image.save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """A small PNG with a line of known text."""
    return _render("PNG", "Calories: 250")


@pytest.fixture()
def sample_jpeg_bytes() -> bytes:
    """A small JPEG with a line of known text."""
    return _render("JPEG", "Calories: 250")


@pytest.fixture()
def blank_png_bytes() -> bytes:
    """A valid PNG with no text (white canvas)."""
    return _render("PNG", None)
