import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import psycopg
import pytest

from nutrireport.config.settings import Settings
from nutrireport.database.connection import apply_schema, close_pool, get_connection, init_pool
from nutrireport.ingestion.fetcher import ArtifactFetcher

PUBLIC_BASE_URL = "http://files.test"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "nutrireport_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_profile(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """Insert a profile with notes ['peanuts'] and remove it with its reports afterwards."""
    user_id = str(uuid.uuid4())
    db_conn.execute(
        "INSERT INTO user_profiles (auth_uid, notes) VALUES (%s, %s)",
        (user_id, ["peanuts"]),
    )
    db_conn.commit()
    try:
        yield user_id
    finally:
        db_conn.execute("DELETE FROM reports WHERE auth_uid = %s", (user_id,))
        db_conn.execute("DELETE FROM user_profiles WHERE auth_uid = %s", (user_id,))
        db_conn.commit()


@pytest.fixture
def public_base_url() -> str:
    return PUBLIC_BASE_URL


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path / "files"


@pytest.fixture
def file_server_fetcher(files_root: Path) -> ArtifactFetcher:
    """Fetcher whose HTTP transport serves files_root under PUBLIC_BASE_URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = files_root / request.url.path.lstrip("/")
        if not path.is_file():
            return httpx.Response(404)
        return httpx.Response(200, content=path.read_bytes())

    return ArtifactFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))
