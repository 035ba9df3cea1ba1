"""
Duplicate pruning for PostgreSQL tables.

The dataset tables carry no surrogate primary key, so the physical identity
used to break ties is the row's ``ctid``. For each logical key the row with
the smallest ``ctid`` survives:

    DELETE FROM t
    WHERE ctid NOT IN (SELECT MIN(ctid) FROM t GROUP BY <key columns>)

``min(tid)`` requires PostgreSQL 14 or later. Engine errors (missing table,
unknown column, timeouts) propagate unchanged.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from psycopg import Connection, sql
from psycopg.rows import dict_row

from art_eda.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class PruneTarget:
    """A table and the column combination that should be unique in it."""

    table: str
    key_columns: Tuple[str, ...]
    schema: str = "public"

    def __post_init__(self) -> None:
        if not self.key_columns:
            raise ValueError(f"PruneTarget '{self.table}' needs at least one key column")

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.table}"

    def _table_sql(self) -> sql.Composable:
        return sql.Identifier(self.schema, self.table)

    def _keys_sql(self) -> sql.Composable:
        return sql.SQL(", ").join(sql.Identifier(column) for column in self.key_columns)


DEFAULT_TARGETS: Tuple[PruneTarget, ...] = (
    PruneTarget("work", ("work_id",)),
    PruneTarget("product_size", ("work_id", "size_id")),
    PruneTarget("image_link", ("work_id",)),
    PruneTarget("museum_hours", ("museum_id", "day")),
)


@dataclass
class DuplicateScan:
    """Row and key counts of a table before any delete."""

    table: str
    key_columns: Tuple[str, ...]
    total_rows: int
    distinct_keys: int
    sample: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def duplicates(self) -> int:
        return self.total_rows - self.distinct_keys


@dataclass
class PruneResult:
    table: str
    key_columns: Tuple[str, ...]
    rows_before: int
    rows_after: int
    removed: int
    dry_run: bool = False

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["key_columns"] = list(self.key_columns)
        return payload


def scan_table(
    conn: Connection, target: PruneTarget, sample_size: int = DEFAULT_SAMPLE_SIZE
) -> DuplicateScan:
    """
    Count rows and distinct logical keys, and sample the most duplicated keys.
    """
    counts_query = sql.SQL(
        "SELECT (SELECT COUNT(*) FROM {table}) AS total_rows, "
        "(SELECT COUNT(*) FROM (SELECT DISTINCT {keys} FROM {table}) AS k) AS distinct_keys"
    ).format(table=target._table_sql(), keys=target._keys_sql())
    sample_query = sql.SQL(
        "SELECT {keys}, COUNT(*) AS copies FROM {table} "
        "GROUP BY {keys} HAVING COUNT(*) > 1 "
        "ORDER BY copies DESC, {keys} LIMIT %s"
    ).format(table=target._table_sql(), keys=target._keys_sql())

    with conn.cursor(row_factory=dict_row) as cur:
        cur.execute(counts_query)
        counts = cur.fetchone()
        sample: List[Dict[str, Any]] = []
        if sample_size > 0 and counts["total_rows"] > counts["distinct_keys"]:
            cur.execute(sample_query, (sample_size,))
            sample = list(cur.fetchall())

    scan = DuplicateScan(
        table=target.qualified_name,
        key_columns=target.key_columns,
        total_rows=int(counts["total_rows"]),
        distinct_keys=int(counts["distinct_keys"]),
        sample=sample,
    )
    log.info(
        f"Scanned {scan.table}: {scan.duplicates} duplicates / {scan.total_rows} rows",
        extra={"table": scan.table, "duplicates": scan.duplicates, "total_rows": scan.total_rows},
    )
    return scan


def prune_table(conn: Connection, target: PruneTarget, dry_run: bool = False) -> PruneResult:
    """
    Delete every row whose ``ctid`` is not the smallest of its logical key.

    Runs inside a transaction; a failure rolls the delete back and the error
    propagates. With ``dry_run`` nothing is deleted and ``removed`` reports
    what a real run would delete. Re-running after a successful prune removes
    nothing.
    """
    with conn.transaction():
        scan = scan_table(conn, target, sample_size=0)
        if dry_run or scan.duplicates == 0:
            return PruneResult(
                table=scan.table,
                key_columns=target.key_columns,
                rows_before=scan.total_rows,
                rows_after=scan.total_rows,
                removed=scan.duplicates if dry_run else 0,
                dry_run=dry_run,
            )

        delete_query = sql.SQL(
            "DELETE FROM {table} WHERE ctid NOT IN "
            "(SELECT MIN(ctid) FROM {table} GROUP BY {keys})"
        ).format(table=target._table_sql(), keys=target._keys_sql())
        with conn.cursor() as cur:
            cur.execute(delete_query)
            removed = cur.rowcount

    result = PruneResult(
        table=scan.table,
        key_columns=target.key_columns,
        rows_before=scan.total_rows,
        rows_after=scan.total_rows - removed,
        removed=removed,
    )
    log.info(
        f"Pruned {result.table}: deleted {removed} rows "
        f"({result.rows_before} -> {result.rows_after})",
        extra={"table": result.table, "removed": removed},
    )
    return result


def prune_tables(
    conn: Connection, targets: Iterable[PruneTarget] = DEFAULT_TARGETS, dry_run: bool = False
) -> List[PruneResult]:
    """Prune several tables in order, one transaction each."""
    return [prune_table(conn, target, dry_run=dry_run) for target in targets]


def resolve_targets(names: Sequence[str]) -> List[PruneTarget]:
    """Map table names (or ``all``) onto the default prune targets."""
    by_name = {target.table: target for target in DEFAULT_TARGETS}
    if not names or list(names) == ["all"]:
        return list(DEFAULT_TARGETS)
    unknown = [name for name in names if name not in by_name]
    if unknown:
        raise ValueError(
            f"Unknown prune target(s) {', '.join(unknown)}. Available: {', '.join(by_name)}"
        )
    return [by_name[name] for name in names]


__all__ = [
    "DEFAULT_TARGETS",
    "DuplicateScan",
    "PruneResult",
    "PruneTarget",
    "prune_table",
    "prune_tables",
    "resolve_targets",
    "scan_table",
]
