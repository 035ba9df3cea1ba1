"""
Ranking reports: aggregate per group in SQL, then rank and filter through
`art_eda.analysis.ranking` so every report shares one tie policy.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from art_eda.analysis.ranking import rank_filter, top_and_bottom
from art_eda.config import get_settings
from art_eda.reports.abstract import Row, SqlReport, with_rank


def _total(row: Row) -> int:
    return row["total_paintings"]


class TopSubjectsReport(SqlReport):
    name = "top_subjects"
    description = "Most frequent painting subjects."
    query = "SELECT subject, COUNT(*) AS total_paintings FROM subject GROUP BY subject"

    def __init__(self, top: int = 10) -> None:
        self.top = top

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(rank_filter(rows, key=_total, top=self.top))


class TopMuseumsReport(SqlReport):
    name = "top_museums"
    description = "Museums displaying the most paintings."
    query = (
        "SELECT m.name, m.city, m.country, COUNT(w.work_id) AS total_paintings "
        "FROM work AS w "
        "JOIN museum AS m ON m.museum_id = w.museum_id "
        "GROUP BY m.museum_id, m.name, m.city, m.country"
    )

    def __init__(self, top: int = 5) -> None:
        self.top = top

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(rank_filter(rows, key=_total, top=self.top))


class TopArtistsReport(SqlReport):
    name = "top_artists"
    description = "Artists with the most paintings."
    query = (
        "SELECT a.full_name, a.nationality, COUNT(w.work_id) AS total_paintings "
        "FROM work AS w "
        "JOIN artist AS a ON a.artist_id = w.artist_id "
        "GROUP BY a.artist_id, a.full_name, a.nationality"
    )

    def __init__(self, top: int = 5) -> None:
        self.top = top

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(rank_filter(rows, key=_total, top=self.top))


class LeastPopularCanvasSizesReport(SqlReport):
    """Dense ranking so tied sizes share a position and the next size follows directly."""

    name = "least_popular_canvas_sizes"
    description = "Canvas sizes with the fewest paintings (three lowest dense ranks)."
    query = (
        "SELECT c.label, COUNT(w.work_id) AS total_paintings "
        "FROM work AS w "
        "JOIN product_size AS p ON p.work_id = w.work_id::text "
        "JOIN canvas_size AS c ON c.size_id::text = p.size_id "
        "GROUP BY c.label"
    )

    def __init__(self, positions: Sequence[int] = (1, 2, 3)) -> None:
        self.positions = tuple(positions)

    def transform(self, rows: List[Row]) -> List[Row]:
        ranked = rank_filter(
            rows, key=_total, positions=self.positions, method="dense", descending=False
        )
        return with_rank(ranked)


class PopularStyleMuseumReport(SqlReport):
    """
    Most popular style is counted over every painting, displayed or not; the
    museum is then the one holding the most paintings of that style.
    """

    name = "popular_style_museum"
    description = "Museum with the most paintings of the most popular style."
    query = (
        "WITH style_totals AS ("
        " SELECT style, COUNT(*) AS style_total FROM work"
        " WHERE style IS NOT NULL GROUP BY style"
        ") "
        "SELECT m.name AS museum, w.style, st.style_total, COUNT(w.work_id) AS total_paintings "
        "FROM work AS w "
        "JOIN museum AS m ON m.museum_id = w.museum_id "
        "JOIN style_totals AS st ON st.style = w.style "
        "GROUP BY m.museum_id, m.name, w.style, st.style_total"
    )

    def transform(self, rows: List[Row]) -> List[Row]:
        top_styles = {
            row["style"]
            for _, row in rank_filter(rows, key=lambda row: row["style_total"], positions={1})
        }
        candidates = [row for row in rows if row["style"] in top_styles]
        return with_rank(rank_filter(candidates, key=_total, positions={1}))


class MultiCountryArtistsReport(SqlReport):
    name = "multi_country_artists"
    description = "Artists whose paintings are displayed in more than one country."
    query = (
        "SELECT a.full_name AS artist, COUNT(DISTINCT m.country) AS countries "
        "FROM artist AS a "
        "JOIN work AS w ON w.artist_id = a.artist_id "
        "JOIN museum AS m ON m.museum_id = w.museum_id "
        "GROUP BY a.artist_id, a.full_name "
        "HAVING COUNT(DISTINCT m.country) > 1 "
        "ORDER BY countries DESC, artist"
    )

    def summarize(self, rows: List[Row]) -> Optional[str]:
        return f"{len(rows)} artists are displayed in several countries."


class TopCityAndCountryReport(SqlReport):
    """Ties are joined with a comma in a single row."""

    name = "top_city_and_country"
    description = "Country and city with the most museums."
    query = (
        "SELECT 'country' AS kind, country AS place, COUNT(museum_id) AS museums "
        "FROM museum GROUP BY country "
        "UNION ALL "
        "SELECT 'city' AS kind, city AS place, COUNT(museum_id) AS museums "
        "FROM museum GROUP BY city"
    )

    def transform(self, rows: List[Row]) -> List[Row]:
        def leaders(kind: str) -> str:
            places = [row for row in rows if row["kind"] == kind and row["place"] is not None]
            top = rank_filter(places, key=lambda row: row["museums"], positions={1})
            return ", ".join(sorted(row["place"] for _, row in top))

        if not rows:
            return []
        return [{"top_country": leaders("country"), "top_cities": leaders("city")}]


class CountryAtRankReport(SqlReport):
    name = "fifth_country"
    description = "Country with the 5th highest number of paintings."
    query = (
        "SELECT m.country, COUNT(w.work_id) AS total_paintings "
        "FROM work AS w "
        "JOIN museum AS m ON m.museum_id = w.museum_id "
        "GROUP BY m.country"
    )

    def __init__(self, position: int = 5) -> None:
        self.position = position

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(rank_filter(rows, key=_total, positions={self.position}))


class StylePopularityReport(SqlReport):
    name = "style_popularity"
    description = "Most and least popular painting styles."
    query = (
        "SELECT style, COUNT(*) AS total_paintings FROM work "
        "WHERE style IS NOT NULL GROUP BY style"
    )

    def __init__(self, count: int = 3) -> None:
        self.count = count

    def transform(self, rows: List[Row]) -> List[Row]:
        return [
            {"rank": rank, "style": row["style"], "total_paintings": row["total_paintings"],
             "popularity": label}
            for label, rank, row in top_and_bottom(rows, key=_total, count=self.count)
        ]


class TopPortraitArtistsReport(SqlReport):
    name = "top_portrait_artists"
    description = "Artist(s) with the most portraits displayed outside a given country."
    query = (
        "SELECT a.full_name, a.nationality, COUNT(w.work_id) AS total_portraits "
        "FROM work AS w "
        "JOIN artist AS a ON a.artist_id = w.artist_id "
        "JOIN subject AS s ON s.work_id = w.work_id::text "
        "JOIN museum AS m ON m.museum_id = w.museum_id "
        "WHERE s.subject = %s AND m.country <> %s "
        "GROUP BY a.full_name, a.nationality"
    )

    def __init__(self, subject: str = "Portraits", excluded_country: Optional[str] = None) -> None:
        self.subject = subject
        self.excluded_country = excluded_country or get_settings().portrait_excluded_country

    def params(self) -> Sequence[str]:
        return (self.subject, self.excluded_country)

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(
            rank_filter(rows, key=lambda row: row["total_portraits"], positions={1})
        )


__all__ = [
    "CountryAtRankReport",
    "LeastPopularCanvasSizesReport",
    "MultiCountryArtistsReport",
    "PopularStyleMuseumReport",
    "StylePopularityReport",
    "TopArtistsReport",
    "TopCityAndCountryReport",
    "TopMuseumsReport",
    "TopPortraitArtistsReport",
    "TopSubjectsReport",
]
