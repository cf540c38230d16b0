from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for durable object storage holding uploaded report images."""

    @abstractmethod
    def put(self, path: str, data: bytes, content_type: str) -> None:
        """Store `data` under `path`. Never overwrites an existing object.

        Raises:
            StorageError: if the object cannot be stored.
        """

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return the URL under which the object at `path` can be downloaded."""
