"""
Inventory and data-quality reports: what is in the dataset and what looks off.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from art_eda.reports.abstract import Row, SqlReport


class TablesReport(SqlReport):
    name = "tables"
    description = "Tables available in the dataset schema."
    query = (
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_schema = %s ORDER BY table_name"
    )

    def __init__(self, schema: str = "public") -> None:
        self.schema = schema

    def params(self) -> Sequence[str]:
        return (self.schema,)


class UnexhibitedPaintingsReport(SqlReport):
    """Paintings whose `museum_id` is NULL, i.e. not displayed anywhere."""

    name = "unexhibited_paintings"
    description = "Paintings not displayed in any museum."
    query = "SELECT work_id, name FROM work WHERE museum_id IS NULL ORDER BY work_id"

    def summarize(self, rows: List[Row]) -> Optional[str]:
        return f"{len(rows):,} paintings are not on display."


class EmptyMuseumsReport(SqlReport):
    name = "empty_museums"
    description = "Museums without any painting."
    query = (
        "SELECT m.museum_id, m.name, m.city, m.country "
        "FROM museum AS m "
        "WHERE NOT EXISTS (SELECT 1 FROM work AS w WHERE w.museum_id = m.museum_id) "
        "ORDER BY m.museum_id"
    )

    def summarize(self, rows: List[Row]) -> Optional[str]:
        if not rows:
            return "Every museum displays at least one painting."
        return f"{len(rows)} museums display no painting."


class InvalidMuseumCitiesReport(SqlReport):
    """Postal codes typed into the city column show up as cities starting with a digit."""

    name = "invalid_museum_cities"
    description = "Museums whose city starts with a digit."
    query = "SELECT museum_id, name, city FROM museum WHERE city ~ '^[0-9]' ORDER BY museum_id"


__all__ = [
    "EmptyMuseumsReport",
    "InvalidMuseumCitiesReport",
    "TablesReport",
    "UnexhibitedPaintingsReport",
]
