import io

from PIL import Image, UnidentifiedImageError

from nutrireport.ingestion.models import UploadCandidate

PREVIEW_SIZE = (640, 160)


def build_preview(candidate: UploadCandidate, max_size: tuple[int, int] = PREVIEW_SIZE) -> bytes:
    """Render a PNG thumbnail of the selected image, keeping its aspect ratio.

    Raises:
        ValueError: if the candidate's bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(candidate.data)) as image:
            thumbnail = image.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Cannot preview {candidate.filename}: {exc}") from exc
    thumbnail.thumbnail(max_size)
    buf = io.BytesIO()
    thumbnail.save(buf, format="PNG")
    return buf.getvalue()
