from __future__ import annotations

from typer.testing import CliRunner

from art_eda import main as cli
from art_eda.pruning.postgres import PruneResult

runner = CliRunner()


def test_info_shows_connection_target():
    result = runner.invoke(cli.app, ["info"])

    assert result.exit_code == 0
    assert "postgres@localhost:5432/paintings" in result.output


def test_report_list_prints_registry():
    result = runner.invoke(cli.app, ["report", "--name", "list"])

    assert result.exit_code == 0
    assert "top_museums" in result.output
    assert "price_extremes" in result.output


def test_report_unknown_name_is_a_usage_error():
    result = runner.invoke(cli.app, ["report", "-n", "nope", "--no-persist"])

    assert result.exit_code == 2


def test_report_exit_code_reflects_failures(monkeypatch):
    monkeypatch.setattr(
        cli,
        "run_reports",
        lambda config: [{"report": "top_museums", "error": "connection refused"}],
    )

    result = runner.invoke(cli.app, ["report", "-n", "top_museums", "--json"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_prune_forwards_tables_and_dry_run(monkeypatch):
    calls = []

    def fake_run_prune(tables, dry_run, dsn):
        calls.append((list(tables), dry_run, dsn))
        return [PruneResult("public.work", ("work_id",), 11, 11, 1, dry_run=True)]

    monkeypatch.setattr(cli, "run_prune", fake_run_prune)

    result = runner.invoke(cli.app, ["prune", "-t", "work", "--dry-run"])

    assert result.exit_code == 0
    assert calls == [(["work"], True, None)]
    assert "public.work" in result.output


def test_tables_exit_code_reflects_failure(monkeypatch):
    monkeypatch.setattr(
        cli,
        "run_reports",
        lambda config: [{"report": "tables", "error": "connection refused"}],
    )

    result = runner.invoke(cli.app, ["tables"])

    assert result.exit_code == 1
    assert "tables failed: connection refused" in result.output
