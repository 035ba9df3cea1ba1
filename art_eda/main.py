from __future__ import annotations

import json
import sys
from typing import List, Optional

import typer

from art_eda.config import get_settings
from art_eda.orchestrator import RunConfig, describe_reports, run_prune, run_reports, run_scan
from art_eda.reporter import print_prune_results, print_results, print_scans
from art_eda.utils.logging import configure_logging

app = typer.Typer(help="Paintings dataset EDA: analytical reports and duplicate pruning.")


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"statement_timeout={settings.db_statement_timeout_ms}ms "
        f"results_dir={settings.results_dir} env={settings.app_env}"
    )


@app.command()
def tables() -> None:
    """
    List the tables of the dataset schema.
    """
    _setup()
    results = run_reports(RunConfig(report_names=["tables"], persist=False))
    print_results(results)
    if any(r.get("error") for r in results):
        raise typer.Exit(code=1)


@app.command()
def report(
    names: List[str] = typer.Option(
        ["all"],
        "--name",
        "-n",
        help="Report to run; repeat for several. Use 'all' for every report or 'list' to show them.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON instead of tables."),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Write JSON artifacts."),
) -> None:
    """
    Run analytical reports and render their result sets.
    """
    if names == ["list"]:
        for name, description in describe_reports().items():
            typer.echo(f"{name:28} {description}")
        return

    _setup()
    try:
        results = run_reports(RunConfig(report_names=names, persist=persist))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--name") from exc

    if as_json:
        typer.echo(json.dumps(results, indent=2, default=str))
    else:
        print_results(results)
    if any(r.get("error") for r in results):
        raise typer.Exit(code=1)


@app.command()
def scan(
    table: List[str] = typer.Option(["all"], "--table", "-t", help="Table to scan; repeatable."),
) -> None:
    """
    Count duplicate rows per logical key without deleting anything.
    """
    _setup()
    try:
        scans = run_scan(table)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--table") from exc
    print_scans(scans)


@app.command()
def prune(
    table: List[str] = typer.Option(["all"], "--table", "-t", help="Table to prune; repeatable."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would be deleted."),
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
) -> None:
    """
    Keep the earliest physical copy of each logical row and delete the rest.
    """
    _setup()
    try:
        results = run_prune(table, dry_run=dry_run, dsn=dsn)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--table") from exc
    print_prune_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
