from pathlib import Path
from urllib.parse import quote

from nutrireport.ingestion.exceptions import StorageError
from nutrireport.storage.base import BaseBlobStore


class LocalBlobStore(BaseBlobStore):
    """Stores objects under a directory that is served at `public_base_url`."""

    def __init__(self, files_root: Path, public_base_url: str) -> None:
        self._files_root = files_root
        self._public_base_url = public_base_url.rstrip("/")

    def put(self, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("xb") as fh:
                fh.write(data)
        except FileExistsError as exc:
            raise StorageError(f"Upload failed: {path} already exists") from exc
        except OSError as exc:
            raise StorageError(f"Upload failed: {exc}") from exc

    def public_url(self, path: str) -> str:
        # User ids may carry URL delimiters such as '#', '?' or '%'.
        return f"{self._public_base_url}/{quote(path.lstrip('/'))}"

    def _resolve(self, path: str) -> Path:
        target = (self._files_root / path).resolve()
        if not target.is_relative_to(self._files_root.resolve()):
            raise StorageError(f"Upload failed: path {path} escapes the storage root")
        return target
