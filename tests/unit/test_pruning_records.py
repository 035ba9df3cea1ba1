from __future__ import annotations

import random
from typing import NamedTuple

from art_eda.pruning.records import find_duplicate_groups, prune_records


class PriceRow(NamedTuple):
    work_id: int
    size_id: str
    row_id: int


def _work_and_size(row: PriceRow) -> tuple[int, str]:
    return (row.work_id, row.size_id)


def _row_id(row: PriceRow) -> int:
    return row.row_id


def test_prune_keeps_first_physical_copy_per_key():
    rows = [PriceRow(1, "A", 100), PriceRow(1, "A", 101), PriceRow(1, "B", 102)]

    outcome = prune_records(rows, key=_work_and_size, identity=_row_id)

    assert outcome.kept == [PriceRow(1, "A", 100), PriceRow(1, "B", 102)]
    assert outcome.removed == [PriceRow(1, "A", 101)]
    assert outcome.removed_count == 1


def test_prune_ignores_input_order():
    rows = [PriceRow(7, "A", 30), PriceRow(7, "A", 12), PriceRow(7, "A", 21)]

    outcome = prune_records(rows, key=_work_and_size, identity=_row_id)

    assert outcome.kept == [PriceRow(7, "A", 12)]
    assert [r.row_id for r in outcome.removed] == [21, 30]


def test_prune_properties_hold_on_shuffled_duplicates():
    rng = random.Random(42)
    rows = [
        PriceRow(rng.randint(1, 15), rng.choice("ABC"), row_id)
        for row_id in rng.sample(range(10_000), 200)
    ]

    outcome = prune_records(rows, key=_work_and_size, identity=_row_id)
    distinct_keys = {_work_and_size(r) for r in rows}

    assert len(outcome.kept) == len(distinct_keys)
    assert len(outcome.removed) == len(rows) - len(distinct_keys)
    assert {_work_and_size(r) for r in outcome.kept} == distinct_keys
    for survivor in outcome.kept:
        group = [r.row_id for r in rows if _work_and_size(r) == _work_and_size(survivor)]
        assert survivor.row_id == min(group)


def test_second_prune_removes_nothing():
    rows = [PriceRow(1, "A", 3), PriceRow(1, "A", 1), PriceRow(2, "A", 2), PriceRow(2, "A", 4)]

    first = prune_records(rows, key=_work_and_size, identity=_row_id)
    second = prune_records(first.kept, key=_work_and_size, identity=_row_id)

    assert second.removed == []
    assert second.kept == first.kept


def test_prune_empty_input():
    outcome = prune_records([], key=_work_and_size, identity=_row_id)

    assert outcome.kept == []
    assert outcome.removed == []


def test_find_duplicate_groups_reports_multiplicity():
    rows = [PriceRow(1, "A", 1), PriceRow(1, "A", 2), PriceRow(1, "A", 3), PriceRow(2, "B", 4)]

    assert find_duplicate_groups(rows, key=_work_and_size) == {(1, "A"): 3}
