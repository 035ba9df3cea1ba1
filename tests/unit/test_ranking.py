from __future__ import annotations

import pytest

from art_eda.analysis.ranking import (
    LEAST_POPULAR,
    MOST_POPULAR,
    rank_filter,
    rank_rows,
    top_and_bottom,
)

COUNTS = [
    {"name": "a", "total": 10},
    {"name": "b", "total": 7},
    {"name": "c", "total": 10},
    {"name": "d", "total": 3},
    {"name": "e", "total": 7},
    {"name": "f", "total": 1},
]


def _total(row: dict) -> int:
    return row["total"]


def _ranks(ranked) -> list[tuple[int, str]]:
    return [(rank, row["name"]) for rank, row in ranked]


def test_rank_skips_positions_after_ties():
    ranked = rank_rows(COUNTS, key=_total)

    assert _ranks(ranked) == [(1, "a"), (1, "c"), (3, "b"), (3, "e"), (5, "d"), (6, "f")]


def test_dense_rank_has_no_gaps():
    ranked = rank_rows(COUNTS, key=_total, method="dense")

    assert [rank for rank, _ in ranked] == [1, 1, 2, 2, 3, 4]


def test_ascending_rank_starts_from_smallest():
    ranked = rank_rows(COUNTS, key=_total, descending=False)

    assert _ranks(ranked)[:3] == [(1, "f"), (2, "d"), (3, "b")]


def test_rank_rows_rejects_unknown_method():
    with pytest.raises(ValueError, match="Unknown rank method"):
        rank_rows(COUNTS, key=_total, method="row_number")  # type: ignore[arg-type]


def test_rank_rows_leaves_out_missing_values():
    rows = COUNTS + [{"name": "g", "total": None}]

    assert _ranks(rank_rows(rows, _total)) == [(1, "a"), (1, "c"), (3, "b"), (3, "e"), (5, "d"), (6, "f")]
    assert _ranks(rank_rows(rows, _total, descending=False))[0] == (1, "f")


def test_rank_rows_on_empty_input():
    assert rank_rows([], key=_total) == []


def test_rank_filter_top_keeps_every_tie_within_the_cut():
    kept = rank_filter(COUNTS, key=_total, top=3)

    assert _ranks(kept) == [(1, "a"), (1, "c"), (3, "b"), (3, "e")]


def test_rank_filter_positions_may_select_nothing():
    # Ranks 1, 1, 3, ... never produce a 2 under competition ranking.
    assert rank_filter(COUNTS, key=_total, positions={2}) == []


def test_rank_filter_dense_positions():
    kept = rank_filter(COUNTS, key=_total, positions=(1, 2, 3), method="dense", descending=False)

    assert _ranks(kept) == [(1, "f"), (2, "d"), (3, "b"), (3, "e")]


@pytest.mark.parametrize("kwargs", [{}, {"top": 2, "positions": {1}}])
def test_rank_filter_requires_exactly_one_selector(kwargs):
    with pytest.raises(ValueError, match="exactly one"):
        rank_filter(COUNTS, key=_total, **kwargs)


def test_rank_filter_rejects_non_positive_top():
    with pytest.raises(ValueError):
        rank_filter(COUNTS, key=_total, top=0)


def test_top_and_bottom_labels_both_ends():
    labelled = top_and_bottom(COUNTS, key=_total, count=1)

    assert [(label, rank, row["name"]) for label, rank, row in labelled] == [
        (MOST_POPULAR, 1, "a"),
        (MOST_POPULAR, 1, "c"),
        (LEAST_POPULAR, 1, "f"),
    ]
