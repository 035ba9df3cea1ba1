"""
Paintings EDA - exploratory analysis of a museums/paintings PostgreSQL dataset.

This package bundles:

- Duplicate-row pruning that keeps the earliest physical copy of each
  logical row, both for in-memory records and for dataset tables
- A shared rank filter (RANK / DENSE_RANK semantics) used by the reports
- Analytical reports on paintings, museums, artists, prices and opening hours
- An orchestrator that profiles report runs and persists JSON artifacts
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from art_eda.analysis.ranking import rank_filter, rank_rows, top_and_bottom
from art_eda.config import Settings, get_settings
from art_eda.orchestrator import RunConfig, available_reports, run_prune, run_reports, run_scan
from art_eda.pruning import (
    DEFAULT_TARGETS,
    PruneOutcome,
    PruneResult,
    PruneTarget,
    prune_records,
    prune_table,
)
from art_eda.reports.abstract import AnalyticalReport, ReportResult, SqlReport
from art_eda.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Orchestration
    "RunConfig",
    "available_reports",
    "run_prune",
    "run_reports",
    "run_scan",
    # Pruning
    "DEFAULT_TARGETS",
    "PruneOutcome",
    "PruneResult",
    "PruneTarget",
    "prune_records",
    "prune_table",
    # Ranking
    "rank_filter",
    "rank_rows",
    "top_and_bottom",
    # Report abstractions
    "AnalyticalReport",
    "ReportResult",
    "SqlReport",
    # Logging
    "configure_logging",
    "get_logger",
]
