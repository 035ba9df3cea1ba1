"""
Report interfaces and result contracts for the paintings EDA toolkit.

A report answers one analytical question against the dataset. Concrete
reports subclass SqlReport: SQL computes the per-group aggregate, and
`transform` ranks, filters or reshapes the fetched rows in Python.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, TypedDict, runtime_checkable

from psycopg import Connection
from psycopg.rows import dict_row

Row = Dict[str, Any]


class ReportResult(TypedDict, total=False):
    """
    Tabular output of a report.

    The orchestrator adds profiling data and an `error` field when the report
    fails; `notes` carries a one-line human summary.
    """

    columns: List[str]
    rows: List[Row]
    row_count: int
    notes: Optional[str]
    error: Optional[str]
    extra: Dict[str, Any]


@runtime_checkable
class AnalyticalReport(Protocol):
    """
    Common interface of every report.

    Attributes
    ----------
    name : str
        Short machine-friendly identifier used by the CLI and registry.
    description : str
        The question the report answers.
    """

    name: str
    description: str

    def execute(self, conn: Connection) -> ReportResult:
        """Run the report on an open connection and return its result set."""
        ...


class SqlReport(abc.ABC):
    """
    Base class for reports backed by a single read-only query.

    Subclasses set `name`, `description` and `query`, and override `params`
    and `transform` where needed.
    """

    name: str
    description: str
    query: str

    def params(self) -> Optional[Sequence[Any]]:
        """Query parameters; None when the query has no placeholders."""
        return None

    def transform(self, rows: List[Row]) -> List[Row]:
        """Post-process fetched rows. Identity by default."""
        return rows

    def summarize(self, rows: List[Row]) -> Optional[str]:
        return None

    def execute(self, conn: Connection) -> ReportResult:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(self.query, self.params())
            fetched = list(cur.fetchall())
            described = [column.name for column in cur.description or ()]

        rows = self.transform(fetched)
        columns = list(rows[0].keys()) if rows else described
        return ReportResult(
            columns=columns,
            rows=rows,
            row_count=len(rows),
            notes=self.summarize(rows),
        )


def with_rank(ranked: Iterable[Tuple[int, Row]], column: str = "rank") -> List[Row]:
    """Flatten ``(rank, row)`` pairs into rows that lead with the rank column."""
    return [{column: rank, **row} for rank, row in ranked]


__all__ = [
    "AnalyticalReport",
    "ReportResult",
    "Row",
    "SqlReport",
    "with_rank",
]
