from dataclasses import dataclass

from nutrireport.ingestion.exceptions import RejectionReason
from nutrireport.ingestion.models import UploadCandidate

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = frozenset({"image/png", "image/jpeg"})


@dataclass(frozen=True)
class Accepted:
    candidate: UploadCandidate


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    message: str


ValidationOutcome = Accepted | Rejected


class FileValidator:
    """Checks declared size and MIME type of an upload candidate.

    Rules run in order and the first failing rule wins: size, then type.
    File content is not inspected.
    """

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self._max_bytes = max_bytes

    def validate(self, candidate: UploadCandidate) -> ValidationOutcome:
        if candidate.size_bytes > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            return Rejected(RejectionReason.TOO_LARGE, f"File size exceeds {limit_mb}MB limit.")
        if candidate.mime_type not in ALLOWED_MIME_TYPES:
            return Rejected(
                RejectionReason.UNSUPPORTED_TYPE, "Only PNG and JPEG images are allowed."
            )
        return Accepted(candidate)
