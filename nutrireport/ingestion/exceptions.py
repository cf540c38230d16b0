from enum import Enum


class RejectionReason(str, Enum):
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"


class IngestionError(Exception):
    """Base exception for every stage failure of the ingestion pipeline.

    The message is the short human-readable text reported to the caller.
    """


class ValidationError(IngestionError):
    """Raised when an upload candidate is rejected by the file validator."""

    def __init__(self, reason: RejectionReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class AuthError(IngestionError):
    """Raised when the current user cannot be resolved."""


class StorageError(IngestionError):
    """Raised when the blob store refuses or fails an upload."""


class ProfileFetchError(IngestionError):
    """Raised when the user's profile row is missing or cannot be read."""


class ProfileWriteError(IngestionError):
    """Raised when the merged notes cannot be written back to the profile."""


class FetchBackError(IngestionError):
    """Raised when the stored artifact cannot be fetched from its public URL."""


class OcrError(IngestionError):
    """Raised when the recognition engine fails on the image."""


class PersistError(IngestionError):
    """Raised when the reports table cannot be written or read."""


class InvalidTransitionError(RuntimeError):
    """Raised when a pipeline run is driven out of its fixed stage order."""
