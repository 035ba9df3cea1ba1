"""
Analysis helpers shared by the reports.
"""

from art_eda.analysis.ranking import (
    LEAST_POPULAR,
    MOST_POPULAR,
    rank_filter,
    rank_rows,
    top_and_bottom,
)

__all__ = [
    "LEAST_POPULAR",
    "MOST_POPULAR",
    "rank_filter",
    "rank_rows",
    "top_and_bottom",
]
