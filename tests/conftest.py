"""
Pytest configuration for the paintings EDA toolkit.

Provides fixtures for:
- Database connection management
- Sample data seeding (with or without planted duplicates)
- Settings override for integration tests
- In-memory fakes of psycopg connections for unit tests
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Callable, Dict, Generator, Iterator, List, Optional

import psycopg
import pytest

from art_eda.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "paintings"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if the database is reachable.

    Used to skip integration tests when no database is around.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Session-scoped connection for integration assertions.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def seeded_with_duplicates(db_connection: psycopg.Connection, test_dsn: str) -> Dict[str, int]:
    """
    Load the sample dataset plus one exact copy of a row per prune target.

    Returns the rows loaded per table.
    """
    from scripts.seed_sample import seed

    return seed(test_dsn, duplicates=True)


@pytest.fixture(scope="function")
def seeded_clean(db_connection: psycopg.Connection, test_dsn: str) -> Dict[str, int]:
    """
    Load the sample dataset without duplicates.
    """
    from scripts.seed_sample import seed

    return seed(test_dsn, duplicates=False)


class FakeCursor:
    """
    Minimal stand-in for a psycopg cursor.

    `responder` receives the rendered query text and params and returns the
    rows (list of dicts) for it; `rowcount` mirrors what a DELETE reports.
    """

    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self._rows: List[Dict[str, Any]] = []
        self.description: Optional[List[SimpleNamespace]] = None
        self.rowcount = -1

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def execute(self, query: Any, params: Any = None) -> "FakeCursor":
        text = query if isinstance(query, str) else query.as_string(None)
        self._conn.executed.append((text, params))
        rows, rowcount = self._conn.responder(text, params)
        self._rows = list(rows)
        self.rowcount = rowcount if rowcount is not None else len(self._rows)
        columns = list(self._rows[0].keys()) if self._rows else self._conn.empty_columns
        self.description = [SimpleNamespace(name=name) for name in columns]
        return self

    def fetchone(self) -> Optional[Dict[str, Any]]:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> List[Dict[str, Any]]:
        return list(self._rows)


class FakeConnection:
    def __init__(
        self,
        responder: Callable[[str, Any], tuple],
        empty_columns: Optional[List[str]] = None,
    ) -> None:
        self.responder = responder
        self.empty_columns = empty_columns or []
        self.executed: List[tuple] = []
        self.transactions = 0

    def cursor(self, row_factory: Any = None) -> FakeCursor:
        del row_factory
        return FakeCursor(self)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        self.transactions += 1
        yield


@pytest.fixture
def fake_connection() -> Callable[..., FakeConnection]:
    """
    Factory for FakeConnection.

    Pass a list of rows to answer every query with them, or a callable
    `(query_text, params) -> (rows, rowcount)` for query-specific answers.
    """

    def _make(rows_or_responder: Any = None, empty_columns: Optional[List[str]] = None) -> FakeConnection:
        if callable(rows_or_responder):
            return FakeConnection(rows_or_responder, empty_columns)
        rows = list(rows_or_responder or [])
        return FakeConnection(lambda query, params: (rows, None), empty_columns)

    return _make
