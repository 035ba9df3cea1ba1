"""
Opening-hours reports over `museum_hours`.

Hours are stored as text like "09:00:AM"; `to_timestamp` parses them with
the meridian indicator so durations come back as intervals.
"""

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional, Sequence, Tuple

from art_eda.analysis.ranking import rank_filter
from art_eda.domain.models import WEEKDAYS
from art_eda.reports.abstract import Row, SqlReport, with_rank


class OpenOnDaysReport(SqlReport):
    """Museums that have an opening-hours entry on every one of the given days."""

    name = "open_sunday_and_monday"
    description = "Museums open on both Sunday and Monday."
    query = (
        "SELECT m.name AS museum_name, m.city, m.country "
        "FROM museum_hours AS mh "
        "JOIN museum AS m ON m.museum_id = mh.museum_id "
        "WHERE mh.day = ANY(%s) "
        "GROUP BY m.museum_id, m.name, m.city, m.country "
        "HAVING COUNT(DISTINCT mh.day) = %s "
        "ORDER BY m.name"
    )

    def __init__(self, days: Sequence[str] = ("Sunday", "Monday")) -> None:
        unknown = [day for day in days if day not in WEEKDAYS]
        if not days or unknown:
            raise ValueError(f"days must be weekday names, got {list(days)}")
        self.days: Tuple[str, ...] = tuple(dict.fromkeys(days))

    def params(self) -> Sequence[object]:
        return (list(self.days), len(self.days))

    def summarize(self, rows: List[Row]) -> Optional[str]:
        return f"{len(rows)} museums are open on {' and '.join(self.days)}."


class OpenEveryDayReport(SqlReport):
    name = "open_every_day"
    description = "Number of museums open every day of the week."
    query = (
        "SELECT COUNT(*) AS total_museums FROM ("
        " SELECT museum_id FROM museum_hours"
        " GROUP BY museum_id HAVING COUNT(DISTINCT day) = %s"
        ") AS museums"
    )

    def params(self) -> Sequence[int]:
        return (len(WEEKDAYS),)


class LongestOpeningReport(SqlReport):
    name = "longest_opening"
    description = "Museum and day with the longest opening hours."
    query = (
        "SELECT m.name AS museum, m.state, mh.day, mh.open, mh.close, "
        "TO_TIMESTAMP(mh.close, 'HH:MI PM') - TO_TIMESTAMP(mh.open, 'HH:MI AM') AS duration "
        "FROM museum_hours AS mh "
        "JOIN museum AS m ON m.museum_id = mh.museum_id"
    )

    def transform(self, rows: List[Row]) -> List[Row]:
        def duration(row: Row) -> timedelta:
            return row["duration"] or timedelta(0)

        return with_rank(rank_filter(rows, key=duration, positions={1}))

    def summarize(self, rows: List[Row]) -> Optional[str]:
        if not rows:
            return None
        top = rows[0]
        return f"{top['museum']} stays open {top['duration']} on {top['day']}."


__all__ = ["LongestOpeningReport", "OpenEveryDayReport", "OpenOnDaysReport"]
