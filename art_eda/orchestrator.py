"""
Orchestrator for running reports, profiling them, and persisting results.

Usage (example from CLI):
    from art_eda.orchestrator import RunConfig, run_reports

    results = run_reports(RunConfig(report_names=["top_museums", "top_artists"]))

Outputs are saved under the results directory (default `results/`):
- `latest.json` (last run)
- `run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, ContextManager, Dict, Iterator, List, Optional, Sequence

from psycopg import Connection

from art_eda.config import get_settings
from art_eda.infrastructure.db_factory import PoolManager, open_connection
from art_eda.pruning.postgres import (
    DuplicateScan,
    PruneResult,
    prune_tables,
    resolve_targets,
    scan_table,
)
from art_eda.reports import (
    AnalyticalReport,
    CountryAtRankReport,
    DeepDiscountsReport,
    EmptyMuseumsReport,
    InvalidMuseumCitiesReport,
    LeastPopularCanvasSizesReport,
    LongestOpeningReport,
    MostExpensiveCanvasReport,
    MultiCountryArtistsReport,
    OpenEveryDayReport,
    OpenOnDaysReport,
    PopularStyleMuseumReport,
    PriceComparisonReport,
    PriceExtremesReport,
    ReportResult,
    SaleAboveRegularReport,
    StylePopularityReport,
    TablesReport,
    TopArtistsReport,
    TopCityAndCountryReport,
    TopMuseumsReport,
    TopPortraitArtistsReport,
    TopSubjectsReport,
    UnexhibitedPaintingsReport,
)
from art_eda.utils.logging import get_logger
from art_eda.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


@dataclass
class RunConfig:
    """
    Parameters of one orchestrated run.

    `report_names` of None or ["all"] runs every registered report. With a
    `dsn` each report gets a dedicated connection; otherwise connections are
    borrowed from the shared pool.
    """

    report_names: Optional[Sequence[str]] = None
    dsn: Optional[str] = None
    results_dir: Optional[Path | str] = None
    persist: bool = True


def _report_factories() -> Dict[str, Callable[[], AnalyticalReport]]:
    """Registry of available reports."""
    return {
        "tables": TablesReport,
        "unexhibited_paintings": UnexhibitedPaintingsReport,
        "empty_museums": EmptyMuseumsReport,
        "sale_above_regular": SaleAboveRegularReport,
        "price_comparison": PriceComparisonReport,
        "deep_discounts": DeepDiscountsReport,
        "most_expensive_canvas": MostExpensiveCanvasReport,
        "invalid_museum_cities": InvalidMuseumCitiesReport,
        "top_subjects": TopSubjectsReport,
        "open_sunday_and_monday": OpenOnDaysReport,
        "open_every_day": OpenEveryDayReport,
        "top_museums": TopMuseumsReport,
        "top_artists": TopArtistsReport,
        "least_popular_canvas_sizes": LeastPopularCanvasSizesReport,
        "longest_opening": LongestOpeningReport,
        "popular_style_museum": PopularStyleMuseumReport,
        "multi_country_artists": MultiCountryArtistsReport,
        "top_city_and_country": TopCityAndCountryReport,
        "price_extremes": PriceExtremesReport,
        "fifth_country": CountryAtRankReport,
        "style_popularity": StylePopularityReport,
        "top_portrait_artists": TopPortraitArtistsReport,
    }


def available_reports() -> List[str]:
    """List available report names."""
    return sorted(_report_factories().keys())


def describe_reports() -> Dict[str, str]:
    """Map each report name to the question it answers."""
    return {name: factory().description for name, factory in sorted(_report_factories().items())}


def _resolve_report(name: str) -> AnalyticalReport:
    factories = _report_factories()
    if name not in factories:
        raise ValueError(f"Unknown report '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]()


def _resolve_names(report_names: Optional[Sequence[str]]) -> List[str]:
    names = list(report_names) if report_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        return available_reports()
    return names


@contextmanager
def _report_connection(dsn: Optional[str]) -> Iterator[Connection]:
    """One connection per report, so a failed query cannot poison the next one."""
    if dsn:
        with open_connection(dsn) as conn:
            yield conn
    else:
        with PoolManager().connection() as conn:
            yield conn


def _json_default(value: object) -> str:
    return str(value)


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True, default=_json_default)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def _profiled_execute(
    report: AnalyticalReport, connect: Callable[[], ContextManager[Connection]]
) -> dict:
    log.info(f"[REPORT START] {report.name}", extra={"report": report.name})
    with profile_block(report.name) as stats:
        try:
            with connect() as conn:
                result = report.execute(conn)
            log.info(
                f"[REPORT SUCCESS] {report.name}",
                extra={"report": report.name, "rows": result.get("row_count", 0)},
            )
        except Exception as exc:  # noqa: BLE001
            log.exception(f"[REPORT FAILED] {report.name}", extra={"report": report.name})
            result = ReportResult(columns=[], rows=[], row_count=0, error=str(exc))

    return _merge_result(result, stats)


def _merge_result(result: ReportResult, stats: ProfileStats) -> dict:
    """Attach profiler stats to a report result."""
    merged = dict(result)
    merged.setdefault("columns", [])
    merged.setdefault("rows", [])
    merged.setdefault("row_count", len(merged["rows"]))
    merged["duration_seconds"] = round(stats.duration_seconds, 4)
    merged["profile"] = stats.as_dict()
    return merged


def run_reports(config: Optional[RunConfig] = None) -> List[dict]:
    """
    Run one or more reports and optionally persist the results.

    Parameters
    ----------
    config : RunConfig | None
        What to run and where to store artifacts. Defaults run every report
        against the configured database and persist to `settings.results_dir`.

    Returns
    -------
    List[dict]
        One dictionary per report: columns, rows, row_count, optional notes
        or error, plus profiler stats.

    Raises
    ------
    ValueError
        If a report name is not registered; raised before anything runs.
    """
    config = config or RunConfig()
    settings = get_settings()
    names = _resolve_names(config.report_names)
    reports = [_resolve_report(name) for name in names]

    results: List[dict] = []
    for position, report in enumerate(reports, start=1):
        log.info(
            f"[REPORT {position}/{len(reports)}] {report.name}",
            extra={"report": report.name, "position": position, "total_reports": len(reports)},
        )
        result = _profiled_execute(report, lambda: _report_connection(config.dsn))
        result["report"] = report.name
        result["description"] = report.description
        results.append(result)

    failures = [r["report"] for r in results if r.get("error")]
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "reports": names,
        "failures": failures,
        "results": results,
    }

    if config.persist:
        _persist_results(payload, Path(config.results_dir or settings.results_dir))

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(names) - len(failures)}/{len(names)} reports succeeded",
        extra={"reports": names, "failures": failures},
    )
    return results


def run_prune(
    table_names: Optional[Sequence[str]] = None,
    dry_run: bool = False,
    dsn: Optional[str] = None,
) -> List[PruneResult]:
    """
    Remove duplicate rows from the named tables (all default targets when
    None or ["all"]). Errors propagate; each table is its own transaction.
    """
    targets = resolve_targets(list(table_names or ["all"]))
    log.info(
        f"[PRUNE START] {', '.join(t.table for t in targets)}",
        extra={"tables": [t.table for t in targets], "dry_run": dry_run},
    )
    with open_connection(dsn) as conn:
        results = prune_tables(conn, targets, dry_run=dry_run)
    log.info(
        f"[PRUNE COMPLETE] {sum(r.removed for r in results)} rows "
        f"{'would be ' if dry_run else ''}removed",
        extra={"dry_run": dry_run},
    )
    return results


def run_scan(table_names: Optional[Sequence[str]] = None, dsn: Optional[str] = None) -> List[DuplicateScan]:
    """Count duplicates per prune target without deleting anything."""
    targets = resolve_targets(list(table_names or ["all"]))
    with open_connection(dsn) as conn:
        return [scan_table(conn, target) for target in targets]


__all__ = [
    "RunConfig",
    "available_reports",
    "describe_reports",
    "run_prune",
    "run_reports",
    "run_scan",
]
