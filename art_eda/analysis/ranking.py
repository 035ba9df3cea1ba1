"""
Rank filter: assign ordinal positions to aggregated rows and keep a subset.

Mirrors the SQL window functions the reports would otherwise inline:

- ``method="rank"``  behaves like ``RANK()``: ties share a position and the
  next distinct value skips ahead (1, 1, 3).
- ``method="dense"`` behaves like ``DENSE_RANK()``: no gaps (1, 1, 2).

Ties keep their input order, so the output is deterministic for a given
input sequence.
"""

from __future__ import annotations

from typing import Any, Callable, Collection, Iterable, List, Literal, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

RankMethod = Literal["rank", "dense"]

MOST_POPULAR = "Most popular"
LEAST_POPULAR = "Least popular"


def rank_rows(
    rows: Iterable[T],
    key: Callable[[T], Any],
    method: RankMethod = "rank",
    descending: bool = True,
) -> List[Tuple[int, T]]:
    """
    Return ``(rank, row)`` pairs ordered by rank.

    Parameters
    ----------
    rows : iterable
        Rows to rank, typically one per group with its aggregate.
    key : callable
        Extracts the ordering value (e.g. a count or a price).
    method : {"rank", "dense"}
        Competition or dense ranking.
    descending : bool
        Highest value first when True.

    Rows whose key is None are left out, so a NULL aggregate never takes a
    position.
    """
    if method not in ("rank", "dense"):
        raise ValueError(f"Unknown rank method '{method}'. Available: rank, dense")

    ordered = sorted((row for row in rows if key(row) is not None), key=key, reverse=descending)
    ranked: List[Tuple[int, T]] = []
    current_rank = 0
    previous: Any = None
    for position, row in enumerate(ordered, start=1):
        value = key(row)
        if position == 1 or value != previous:
            current_rank = position if method == "rank" else current_rank + 1
            previous = value
        ranked.append((current_rank, row))
    return ranked


def rank_filter(
    rows: Iterable[T],
    key: Callable[[T], Any],
    positions: Optional[Collection[int]] = None,
    top: Optional[int] = None,
    method: RankMethod = "rank",
    descending: bool = True,
) -> List[Tuple[int, T]]:
    """
    Rank rows then keep those at the requested positions.

    Exactly one of ``positions`` (explicit ranks, e.g. ``{5}``) or ``top``
    (every rank ``<= top``) must be given.
    """
    if (positions is None) == (top is None):
        raise ValueError("rank_filter needs exactly one of 'positions' or 'top'")
    if top is not None and top < 1:
        raise ValueError(f"top must be >= 1, got {top}")

    ranked = rank_rows(rows, key, method=method, descending=descending)
    if top is not None:
        return [(rank, row) for rank, row in ranked if rank <= top]
    wanted = set(positions or ())
    return [(rank, row) for rank, row in ranked if rank in wanted]


def top_and_bottom(
    rows: Sequence[T],
    key: Callable[[T], Any],
    count: int = 3,
    method: RankMethod = "rank",
) -> List[Tuple[str, int, T]]:
    """
    Label the ``count`` best and worst ranked rows.

    Returns ``(label, rank, row)`` triples: the most popular rows first with
    their descending rank, then the least popular ones with their ascending
    rank. A row can appear in both groups when there are fewer than
    ``2 * count`` distinct values.
    """
    most = rank_filter(rows, key, top=count, method=method, descending=True)
    least = rank_filter(rows, key, top=count, method=method, descending=False)
    return [(MOST_POPULAR, rank, row) for rank, row in most] + [
        (LEAST_POPULAR, rank, row) for rank, row in least
    ]


__all__ = [
    "LEAST_POPULAR",
    "MOST_POPULAR",
    "RankMethod",
    "rank_filter",
    "rank_rows",
    "top_and_bottom",
]
