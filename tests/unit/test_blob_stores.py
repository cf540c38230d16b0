from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from nutrireport.ingestion.exceptions import StorageError
from nutrireport.ingestion.fetcher import ArtifactFetcher
from nutrireport.storage.local_adapter import LocalBlobStore
from nutrireport.storage.supabase_adapter import SupabaseBlobStore


class TestLocalBlobStore:
    def test_put_writes_file(self, tmp_path: Path) -> None:
        store = LocalBlobStore(files_root=tmp_path, public_base_url="http://files.local/")

        store.put("reports/u1_1.png", b"png-bytes", "image/png")

        assert (tmp_path / "reports" / "u1_1.png").read_bytes() == b"png-bytes"

    def test_public_url(self, tmp_path: Path) -> None:
        store = LocalBlobStore(files_root=tmp_path, public_base_url="http://files.local/")
        assert store.public_url("reports/u1_1.png") == "http://files.local/reports/u1_1.png"

    def test_public_url_escapes_url_delimiters(self, tmp_path: Path) -> None:
        store = LocalBlobStore(files_root=tmp_path, public_base_url="http://files.local")
        assert (
            store.public_url("reports/team#7?x_50%_1.png")
            == "http://files.local/reports/team%237%3Fx_50%25_1.png"
        )

    @pytest.mark.parametrize("user_id", ["team#7", "a?b", "50%off", "with space"])
    def test_put_then_fetch_public_url_returns_object(self, tmp_path: Path, user_id: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            target = tmp_path / request.url.path.lstrip("/")
            if not target.is_file():
                return httpx.Response(404)
            return httpx.Response(200, content=target.read_bytes())

        store = LocalBlobStore(files_root=tmp_path, public_base_url="http://files.local")
        fetcher = ArtifactFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))
        path = f"reports/{user_id}_1.png"

        store.put(path, b"png-bytes", "image/png")

        assert fetcher.fetch(store.public_url(path)) == b"png-bytes"

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        store = LocalBlobStore(files_root=tmp_path, public_base_url="http://files.local")
        store.put("reports/u1_1.png", b"first", "image/png")

        with pytest.raises(StorageError, match="already exists"):
            store.put("reports/u1_1.png", b"second", "image/png")

        assert (tmp_path / "reports" / "u1_1.png").read_bytes() == b"first"

    def test_rejects_path_outside_root(self, tmp_path: Path) -> None:
        store = LocalBlobStore(files_root=tmp_path / "root", public_base_url="http://f")

        with pytest.raises(StorageError, match="escapes"):
            store.put("../outside.png", b"x", "image/png")


class TestSupabaseBlobStore:
    def test_put_uploads_without_upsert(self) -> None:
        client = MagicMock()
        bucket = client.storage.from_.return_value

        SupabaseBlobStore(client, "reports").put("reports/u1_1.jpg", b"jpg", "image/jpeg")

        client.storage.from_.assert_called_with("reports")
        bucket.upload.assert_called_once_with(
            path="reports/u1_1.jpg",
            file=b"jpg",
            file_options={"content-type": "image/jpeg", "upsert": "false"},
        )

    def test_put_wraps_errors(self) -> None:
        client = MagicMock()
        client.storage.from_.return_value.upload.side_effect = RuntimeError("Duplicate")

        with pytest.raises(StorageError, match="Upload failed: Duplicate"):
            SupabaseBlobStore(client, "reports").put("p", b"x", "image/png")

    def test_public_url(self) -> None:
        client = MagicMock()
        client.storage.from_.return_value.get_public_url.return_value = "https://s/p"

        assert SupabaseBlobStore(client, "reports").public_url("p") == "https://s/p"
