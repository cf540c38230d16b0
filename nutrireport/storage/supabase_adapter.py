from supabase import Client

from nutrireport.ingestion.exceptions import StorageError
from nutrireport.storage.base import BaseBlobStore


class SupabaseBlobStore(BaseBlobStore):
    """Stores objects in a Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def put(self, path: str, data: bytes, content_type: str) -> None:
        try:
            self._client.storage.from_(self._bucket).upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as exc:
            raise StorageError(f"Upload failed: {exc}") from exc

    def public_url(self, path: str) -> str:
        return self._client.storage.from_(self._bucket).get_public_url(path)
