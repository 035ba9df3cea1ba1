"""
Pricing reports over `product_size`.

`product_size.size_id` is text while `canvas_size.size_id` is an integer, so
joins cast the canvas side.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from art_eda.analysis.ranking import rank_filter
from art_eda.reports.abstract import Row, SqlReport, with_rank

LEAST_EXPENSIVE = "Least expensive"
MOST_EXPENSIVE = "Most expensive"


class SaleAboveRegularReport(SqlReport):
    """Rows breaking the expected `sale_price <= regular_price` invariant."""

    name = "sale_above_regular"
    description = "Prices whose sale price is higher than the regular price."
    query = (
        "SELECT work_id, size_id, sale_price, regular_price FROM product_size "
        "WHERE sale_price > regular_price ORDER BY work_id, size_id"
    )

    def summarize(self, rows: List[Row]) -> Optional[str]:
        if not rows:
            return "No painting is sold above its regular price."
        return f"{len(rows)} prices exceed their regular price."


class PriceComparisonReport(SqlReport):
    name = "price_comparison"
    description = "How many prices sit below, at, or above the regular price."
    query = (
        "SELECT "
        "COUNT(*) FILTER (WHERE sale_price < regular_price) AS below_regular, "
        "COUNT(*) FILTER (WHERE sale_price = regular_price) AS at_regular, "
        "COUNT(*) FILTER (WHERE sale_price > regular_price) AS above_regular "
        "FROM product_size"
    )


class DeepDiscountsReport(SqlReport):
    name = "deep_discounts"
    description = "Prices whose sale price is under a fraction (default 50%) of the regular price."
    query = (
        "SELECT work_id, size_id, sale_price, regular_price FROM product_size "
        "WHERE sale_price < regular_price * %s ORDER BY work_id, size_id"
    )

    def __init__(self, ratio: Decimal | float = Decimal("0.5")) -> None:
        if not 0 < Decimal(str(ratio)) <= 1:
            raise ValueError(f"ratio must be in (0, 1], got {ratio}")
        self.ratio = Decimal(str(ratio))

    def params(self) -> Sequence[Decimal]:
        return (self.ratio,)

    def summarize(self, rows: List[Row]) -> Optional[str]:
        return f"{len(rows)} prices below {self.ratio:.0%} of the regular price."


class MostExpensiveCanvasReport(SqlReport):
    name = "most_expensive_canvas"
    description = "Canvas size carrying the highest sale price."
    query = (
        "SELECT c.label AS size, MAX(p.sale_price) AS price "
        "FROM product_size AS p "
        "JOIN canvas_size AS c ON p.size_id = c.size_id::text "
        "WHERE p.sale_price IS NOT NULL "
        "GROUP BY c.label"
    )

    def transform(self, rows: List[Row]) -> List[Row]:
        return with_rank(rank_filter(rows, key=lambda row: row["price"], positions={1}))


class PriceExtremesReport(SqlReport):
    """
    Cheapest and most expensive displayed paintings, with artist, museum and
    canvas context. Ties are all reported.
    """

    name = "price_extremes"
    description = "Artist and museum of the least and the most expensive paintings."
    query = (
        "WITH priced AS ("
        " SELECT DISTINCT a.full_name AS artist, p.sale_price AS price, w.name AS painting,"
        " m.name AS museum, m.city, c.label"
        " FROM work AS w"
        " JOIN artist AS a ON a.artist_id = w.artist_id"
        " JOIN product_size AS p ON p.work_id = w.work_id::text"
        " JOIN museum AS m ON m.museum_id = w.museum_id"
        " JOIN canvas_size AS c ON p.size_id = c.size_id::text"
        ") "
        "SELECT * FROM priced "
        "WHERE price = (SELECT MIN(price) FROM priced) OR price = (SELECT MAX(price) FROM priced)"
    )

    def transform(self, rows: List[Row]) -> List[Row]:
        def price(row: Row) -> Decimal:
            return row["price"]

        cheapest = rank_filter(rows, key=price, positions={1}, descending=False)
        priciest = rank_filter(rows, key=price, positions={1}, descending=True)
        return [{"extreme": LEAST_EXPENSIVE, **row} for _, row in cheapest] + [
            {"extreme": MOST_EXPENSIVE, **row} for _, row in priciest
        ]


__all__ = [
    "DeepDiscountsReport",
    "LEAST_EXPENSIVE",
    "MOST_EXPENSIVE",
    "MostExpensiveCanvasReport",
    "PriceComparisonReport",
    "PriceExtremesReport",
    "SaleAboveRegularReport",
]
