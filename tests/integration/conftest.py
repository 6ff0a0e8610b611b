import os
import uuid
from collections.abc import Callable, Generator
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool

_CREATE_DOCUMENTS = """
    CREATE TABLE IF NOT EXISTS documents (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        filename TEXT,
        file_path TEXT,
        original_text TEXT,
        translated_text TEXT,
        detected_language TEXT,
        parsed_data JSONB,
        processing_status TEXT,
        error_message TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "doctranslate_test")
    os.environ.setdefault("STORAGE_BACKEND", "local")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_CREATE_DOCUMENTS)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def user_id() -> str:
    return f"user-{uuid.uuid4()}"


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    user_id: str,
) -> Generator[Callable[..., str], None, None]:
    """Factory inserting a document row for ``user_id``; rows are deleted afterwards."""
    created: list[str] = []

    def _seed(
        filename: str = "deed.pdf",
        status: str = "processing",
        translated_text: str | None = None,
        parsed_data: str | None = None,
    ) -> str:
        document_id = str(uuid.uuid4())
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents
                (id, user_id, filename, file_path, processing_status,
                 translated_text, parsed_data)
                VALUES (%s, %s, %s, %s, %s, %s, %s::jsonb)
                """,
                (
                    document_id,
                    user_id,
                    filename,
                    f"{user_id}/{filename}",
                    status,
                    translated_text,
                    parsed_data,
                ),
            )
        db_conn.commit()
        created.append(document_id)
        return document_id

    yield _seed

    if created:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE id = ANY(%s)", (created,))
        db_conn.commit()
