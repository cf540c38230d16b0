from pathlib import Path

from supabase import create_client

from nutrireport.config.settings import Settings
from nutrireport.storage.base import BaseBlobStore
from nutrireport.storage.local_adapter import LocalBlobStore
from nutrireport.storage.supabase_adapter import SupabaseBlobStore


class BlobStoreFactory:
    """Creates the blob store adapter selected in settings."""

    BACKENDS = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStore(
                files_root=Path(settings.files_root),
                public_base_url=settings.public_base_url,
            )
        if backend == "supabase":
            if not settings.supabase_url or not settings.supabase_key:
                raise ValueError(
                    "supabase_url and supabase_key are required for storage_backend=supabase"
                )
            client = create_client(settings.supabase_url, settings.supabase_key)
            return SupabaseBlobStore(client=client, bucket=settings.storage_bucket)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
