import mimetypes
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UploadCandidate:
    """A file selected for upload, before validation."""

    data: bytes
    mime_type: str
    size_bytes: int
    filename: str

    @classmethod
    def from_bytes(cls, data: bytes, filename: str, mime_type: str) -> "UploadCandidate":
        return cls(data=data, mime_type=mime_type, size_bytes=len(data), filename=filename)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "UploadCandidate":
        """Read a file from disk, declaring its MIME type from the filename.

        The declared type is what a browser would report for the selection; the
        file content is never inspected.
        """
        declared = mime_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls.from_bytes(path.read_bytes(), filename=path.name, mime_type=declared)


@dataclass(frozen=True)
class StoredArtifact:
    """An uploaded image as persisted in the blob store."""

    path: str
    public_url: str


@dataclass(frozen=True)
class ExtractionResult:
    user_id: str
    artifact: StoredArtifact
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
