from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from art_eda.pruning.postgres import DuplicateScan, PruneResult

MAX_DISPLAY_ROWS = 50


def format_cell(value: Any) -> str:
    """Render one result value for the terminal."""
    if value is None:
        return "[dim]NULL[/dim]"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, timedelta):
        hours, remainder = divmod(int(value.total_seconds()), 3600)
        return f"{hours}h {remainder // 60:02d}m"
    return str(value)


def build_report_table(result: Dict[str, Any], max_rows: int = MAX_DISPLAY_ROWS) -> Table:
    """
    Build a rich table for one report result.

    Only the first `max_rows` rows are shown; the caption says how many were
    left out.
    """
    title = result.get("report", "Report")
    if result.get("description"):
        title = f"{title}\n[dim]{result['description']}[/dim]"

    rows: List[Dict[str, Any]] = result.get("rows") or []
    caption_parts: List[str] = []
    if result.get("notes"):
        caption_parts.append(result["notes"])
    if len(rows) > max_rows:
        caption_parts.append(f"showing {max_rows} of {len(rows):,} rows")
    if result.get("duration_seconds") is not None:
        caption_parts.append(f"{result['duration_seconds']:.3f}s")

    table = Table(title=title, box=box.ROUNDED, caption=" │ ".join(caption_parts) or None)
    columns: List[str] = result.get("columns") or []
    for column in columns:
        justify = "right" if rows and isinstance(rows[0].get(column), (int, float, Decimal)) else "left"
        table.add_column(column, justify=justify, style="cyan" if column == "rank" else None)

    for row in rows[:max_rows]:
        table.add_row(*(format_cell(row.get(column)) for column in columns))
    return table


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render report results, one table per report. Failed reports print their
    error instead of a table.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    for result in results:
        if result.get("error"):
            console.print(f"[bold red]{result.get('report', 'Report')} failed:[/bold red] {result['error']}")
            continue
        console.print(build_report_table(result))
        console.print()


def print_prune_results(results: Iterable[PruneResult], console: Optional[Console] = None) -> None:
    """Summarize a prune run as a table; dry runs are flagged in the title."""
    console = console or Console()
    results = list(results)
    dry_run = any(r.dry_run for r in results)

    table = Table(
        title="Duplicate pruning" + (" [yellow](dry run)[/yellow]" if dry_run else ""),
        box=box.ROUNDED,
    )
    table.add_column("Table", style="cyan", no_wrap=True)
    table.add_column("Logical key")
    table.add_column("Before", justify="right", style="magenta")
    table.add_column("Removed" if not dry_run else "Would remove", justify="right", style="red")
    table.add_column("After", justify="right", style="green")

    for r in results:
        table.add_row(
            r.table,
            ", ".join(r.key_columns),
            f"{r.rows_before:,}",
            f"{r.removed:,}",
            f"{r.rows_after:,}",
        )
    console.print(table)


def print_scans(scans: Iterable[DuplicateScan], console: Optional[Console] = None) -> None:
    """List duplicate counts per table, with the most duplicated keys."""
    console = console or Console()
    for scan in scans:
        key_desc = ", ".join(scan.key_columns)
        if scan.duplicates == 0:
            console.print(f"[green]{scan.table}[/green]: clean ({scan.total_rows:,} rows, key: {key_desc})")
            continue
        console.print(
            f"[yellow]{scan.table}[/yellow]: {scan.duplicates:,} duplicates / "
            f"{scan.total_rows:,} rows (key: {key_desc})"
        )
        for sample in scan.sample:
            parts = ", ".join(f"{column}={sample[column]}" for column in scan.key_columns)
            console.print(f"    {parts}  (x{sample['copies']})")


__all__ = [
    "build_report_table",
    "format_cell",
    "print_prune_results",
    "print_results",
    "print_scans",
]
