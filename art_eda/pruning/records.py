"""
In-memory duplicate pruning.

Keep the first physical occurrence of every logical key: one pass over the
records ordered by physical identity, with a seen-key set that lives only as
long as the call.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PruneOutcome(Generic[T]):
    """
    Survivors and discarded duplicates of a prune pass.

    Both lists are ordered by physical identity.
    """

    kept: List[T] = field(default_factory=list)
    removed: List[T] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed)


def prune_records(
    records: Iterable[T],
    key: Callable[[T], Hashable],
    identity: Callable[[T], Any],
) -> PruneOutcome[T]:
    """
    Retain exactly one record per logical key.

    Parameters
    ----------
    records : iterable
        Unordered records; physical identities must be distinct and mutually
        comparable.
    key : callable
        Logical key of a record (e.g. ``lambda r: (r["work_id"], r["size_id"])``).
    identity : callable
        Physical identity of a record; the smallest one per key survives.

    Returns
    -------
    PruneOutcome
        ``kept`` holds one record per distinct key, ``removed`` the rest.
    """
    seen: set = set()
    outcome: PruneOutcome[T] = PruneOutcome()
    for record in sorted(records, key=identity):
        logical_key = key(record)
        if logical_key in seen:
            outcome.removed.append(record)
        else:
            seen.add(logical_key)
            outcome.kept.append(record)
    return outcome


def find_duplicate_groups(
    records: Iterable[T], key: Callable[[T], Hashable]
) -> Dict[Hashable, int]:
    """Logical keys that occur more than once, with their multiplicity."""
    counts = Counter(key(record) for record in records)
    return {logical_key: count for logical_key, count in counts.items() if count > 1}


__all__ = ["PruneOutcome", "find_duplicate_groups", "prune_records"]
