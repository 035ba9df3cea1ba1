"""
Database connection factory for the paintings EDA toolkit.

Provides the DSN builder, a retrying connection factory and a lazily created
connection pool. The PoolManager singleton makes sure the pool is closed on
interpreter exit.

Connection establishment is retried for transient failures using tenacity.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from typing import Generator, Optional

import psycopg
from psycopg import Connection, sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from art_eda.config import Settings, get_settings
from art_eda.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def _configure_session(conn: Connection) -> None:
    """Pool hook: apply the statement timeout to every new pooled connection."""
    with conn.cursor() as cur:
        apply_statement_timeout(cur, get_settings().db_statement_timeout_ms)
    conn.commit()


class PoolManager:
    """
    Thread-safe singleton owning the shared connection pool.

    The pool is created on first use and closed via an atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_pool(self, min_size: int = 1, max_size: int = 4) -> ConnectionPool:
        """
        Get or create the connection pool.

        Parameters
        ----------
        min_size : int
            Minimum number of idle connections to keep.
        max_size : int
            Maximum total connections in the pool.
        """
        with self._lock:
            if self._pool is None:
                self._pool = ConnectionPool(
                    conninfo=build_dsn(),
                    min_size=min_size,
                    max_size=max_size,
                    kwargs={"row_factory": dict_row},
                    configure=_configure_session,
                    open=True,
                )
            return self._pool

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        """
        Borrow a connection from the pool.

        Example
        -------
            with PoolManager().connection() as conn:
                TopMuseumsReport().execute(conn)
        """
        with self.get_pool().connection() as conn:
            yield conn

    def close_all(self) -> None:
        """Close the managed pool, if any."""
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                finally:
                    self._pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Open a dedicated connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection
    errors. Rows come back as dicts keyed by column name.

    Parameters
    ----------
    dsn : str, optional
        Explicit DSN; defaults to the one built from settings.

    Raises
    ------
    psycopg.OperationalError
        If the connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn(), row_factory=dict_row)


def apply_statement_timeout(cur: psycopg.Cursor, timeout_ms: int) -> None:
    """Bound every statement on the cursor's session; 0 disables the limit."""
    cur.execute(sql.SQL("SET statement_timeout = {}").format(sql.Literal(int(timeout_ms))))


@contextmanager
def open_connection(dsn: Optional[str] = None) -> Generator[Connection, None, None]:
    """
    Connection with the configured statement timeout applied, closed on exit.
    """
    conn = get_sync_connection(dsn)
    try:
        with conn.cursor() as cur:
            apply_statement_timeout(cur, get_settings().db_statement_timeout_ms)
        conn.commit()
        log.debug("Connection opened", extra={"dsn_host": conn.info.host})
        yield conn
    finally:
        conn.close()


__all__ = [
    "PoolManager",
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "open_connection",
]
