"""
Duplicate pruning against a live Postgres.

Requires a reachable database (see tests/conftest.py) and
RUN_INTEGRATION_TESTS=1.
"""

from __future__ import annotations

import os

import pytest

from art_eda.orchestrator import run_prune, run_scan

pytestmark = [
    pytest.mark.slow,
    pytest.mark.skipif(
        os.getenv("RUN_INTEGRATION_TESTS") != "1",
        reason="Set RUN_INTEGRATION_TESTS=1 to run Postgres integration tests",
    ),
]

PLANTED = {
    "public.work": 1,
    "public.product_size": 1,
    "public.image_link": 1,
    "public.museum_hours": 1,
}


def _count(conn, table: str) -> int:
    with conn.cursor() as cur:
        cur.execute(f"SELECT COUNT(*) FROM {table}")
        return cur.fetchone()[0]


def test_scan_finds_planted_duplicates(seeded_with_duplicates, test_dsn):
    scans = {scan.table: scan for scan in run_scan(dsn=test_dsn)}

    assert {table: scan.duplicates for table, scan in scans.items()} == PLANTED
    assert scans["public.work"].sample == [{"work_id": 103, "copies": 2}]
    assert scans["public.museum_hours"].sample == [{"museum_id": 3, "day": "Monday", "copies": 2}]


def test_dry_run_deletes_nothing(seeded_with_duplicates, db_connection, test_dsn):
    results = run_prune(dry_run=True, dsn=test_dsn)

    assert {r.table: r.removed for r in results} == PLANTED
    assert all(r.dry_run for r in results)
    assert _count(db_connection, "work") == seeded_with_duplicates["work"]


def test_prune_keeps_one_row_per_key_and_is_idempotent(seeded_with_duplicates, db_connection, test_dsn):
    first = run_prune(dsn=test_dsn)

    assert {r.table: r.removed for r in first} == PLANTED
    for result in first:
        assert result.rows_after == result.rows_before - result.removed

    with db_connection.cursor() as cur:
        cur.execute("SELECT COUNT(*), COUNT(DISTINCT (work_id, size_id)) FROM product_size")
        total, distinct = cur.fetchone()
    assert total == distinct

    second = run_prune(dsn=test_dsn)
    assert all(r.removed == 0 for r in second)


def test_prune_single_table_leaves_others_alone(seeded_with_duplicates, db_connection, test_dsn):
    results = run_prune(["image_link"], dsn=test_dsn)

    assert [(r.table, r.removed) for r in results] == [("public.image_link", 1)]
    assert _count(db_connection, "work") == seeded_with_duplicates["work"]
    assert _count(db_connection, "image_link") == seeded_with_duplicates["image_link"] - 1


def test_prune_on_clean_data_removes_nothing(seeded_clean, test_dsn):
    results = run_prune(dsn=test_dsn)

    assert sum(r.removed for r in results) == 0


@pytest.mark.parametrize(
    "table, keys",
    [
        ("work", "work_id"),
        ("product_size", "work_id, size_id"),
        ("image_link", "work_id"),
        ("museum_hours", "museum_id, day"),
    ],
)
def test_prune_keeps_smallest_ctid_per_key(seeded_with_duplicates, db_connection, test_dsn, table, keys):
    with db_connection.cursor() as cur:
        cur.execute(f"SELECT MIN(ctid)::text FROM {table} GROUP BY {keys}")
        expected = {row[0] for row in cur.fetchall()}

    run_prune([table], dsn=test_dsn)

    with db_connection.cursor() as cur:
        cur.execute(f"SELECT ctid::text FROM {table}")
        survivors = {row[0] for row in cur.fetchall()}
    assert survivors == expected
