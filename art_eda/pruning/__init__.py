"""
Duplicate-row pruning: keep the earliest physical copy of each logical row.

`records` works on in-memory sequences, `postgres` on dataset tables.
"""

from art_eda.pruning.postgres import (
    DEFAULT_TARGETS,
    DuplicateScan,
    PruneResult,
    PruneTarget,
    prune_table,
    prune_tables,
    resolve_targets,
    scan_table,
)
from art_eda.pruning.records import PruneOutcome, find_duplicate_groups, prune_records

__all__ = [
    "DEFAULT_TARGETS",
    "DuplicateScan",
    "PruneOutcome",
    "PruneResult",
    "PruneTarget",
    "find_duplicate_groups",
    "prune_records",
    "prune_table",
    "prune_tables",
    "resolve_targets",
    "scan_table",
]
