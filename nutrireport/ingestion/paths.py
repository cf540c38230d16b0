import time

STORAGE_PREFIX = "reports"

_EXTENSION_BY_MIME_TYPE = {
    "image/png": "png",
    "image/jpeg": "jpg",
}


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def file_extension(filename: str, mime_type: str) -> str:
    """Extension after the last dot of the filename, else one implied by the MIME type."""
    stem, dot, extension = filename.rpartition(".")
    if dot and stem and extension:
        return extension
    return _EXTENSION_BY_MIME_TYPE.get(mime_type, "bin")


def build_storage_path(user_id: str, timestamp_ms: int, filename: str, mime_type: str) -> str:
    """Build blob path: reports/{user_id}_{timestamp_ms}.{ext}

    Uploads by the same user collide only within the same millisecond.
    """
    return f"{STORAGE_PREFIX}/{user_id}_{timestamp_ms}.{file_extension(filename, mime_type)}"
