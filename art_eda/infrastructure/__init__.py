"""
Infrastructure package for the paintings EDA toolkit.

Centralizes database connectivity (DSN, retrying connection factory, pool).
Keep this layer focused on I/O and resource management, decoupled from report
and pruning logic.
"""

from art_eda.infrastructure.db_factory import (
    PoolManager,
    apply_statement_timeout,
    build_dsn,
    get_sync_connection,
    open_connection,
)

__all__ = [
    "PoolManager",
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "open_connection",
]
