"""
Reports package for the paintings EDA toolkit.

Re-exports the report contract and the concrete reports so downstream code
can import from `art_eda.reports` directly.
"""

from art_eda.reports.abstract import AnalyticalReport, ReportResult, SqlReport, with_rank
from art_eda.reports.inventory import (
    EmptyMuseumsReport,
    InvalidMuseumCitiesReport,
    TablesReport,
    UnexhibitedPaintingsReport,
)
from art_eda.reports.pricing import (
    LEAST_EXPENSIVE,
    MOST_EXPENSIVE,
    DeepDiscountsReport,
    MostExpensiveCanvasReport,
    PriceComparisonReport,
    PriceExtremesReport,
    SaleAboveRegularReport,
)
from art_eda.reports.rankings import (
    CountryAtRankReport,
    LeastPopularCanvasSizesReport,
    MultiCountryArtistsReport,
    PopularStyleMuseumReport,
    StylePopularityReport,
    TopArtistsReport,
    TopCityAndCountryReport,
    TopMuseumsReport,
    TopPortraitArtistsReport,
    TopSubjectsReport,
)
from art_eda.reports.schedules import LongestOpeningReport, OpenEveryDayReport, OpenOnDaysReport

__all__ = [
    # Contract
    "AnalyticalReport",
    "ReportResult",
    "SqlReport",
    "with_rank",
    # Inventory
    "EmptyMuseumsReport",
    "InvalidMuseumCitiesReport",
    "TablesReport",
    "UnexhibitedPaintingsReport",
    # Pricing
    "LEAST_EXPENSIVE",
    "MOST_EXPENSIVE",
    "DeepDiscountsReport",
    "MostExpensiveCanvasReport",
    "PriceComparisonReport",
    "PriceExtremesReport",
    "SaleAboveRegularReport",
    # Rankings
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
    # Schedules
    "LongestOpeningReport",
    "OpenEveryDayReport",
    "OpenOnDaysReport",
]
