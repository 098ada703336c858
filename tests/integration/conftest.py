import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import apply_schema, close_pool, get_connection, init_pool
from app.database.models import EventRecord
from app.database.repositories.event_repository import EventRepository
from app.status.postgres_store import PostgresStatusStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docpipeline_test")
    return Settings(oracle_provider="example", status_store_backend="postgres")


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
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collects document IDs whose rows are deleted after the test."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM document_events WHERE document_id = ANY(%s)", (cleanup,)
            )
            cur.execute(
                "DELETE FROM document_processing WHERE document_id = ANY(%s)", (cleanup,)
            )
        conn.commit()


@pytest.fixture
def document_id(integration_cleanup: list[str]) -> str:
    new_id = f"it-{uuid.uuid4()}"
    integration_cleanup.append(new_id)
    return new_id


@pytest.fixture
def pg_store(integration_pool: None) -> PostgresStatusStore:
    return PostgresStatusStore()


@pytest.fixture
def seed_record(pg_store: PostgresStatusStore, document_id: str) -> str:
    pg_store.create(document_id, "license.jpg", "image/jpeg", 1_700_000_000_000)
    return document_id


@pytest.fixture
def seed_event(
    integration_pool: None, seed_record: str, test_settings: Settings
) -> EventRecord:
    return EventRepository(test_settings.max_event_attempts).enqueue(seed_record)


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path
