"""
Domain package for the paintings EDA toolkit.

Exports the record models of the paintings dataset. Keep this package focused
on data definitions and validation concerns.
"""

from art_eda.domain.models import (
    WEEKDAYS,
    Artist,
    CanvasSize,
    ImageLink,
    Museum,
    MuseumHours,
    Painting,
    Price,
    Subject,
)

__all__ = [
    "WEEKDAYS",
    "Artist",
    "CanvasSize",
    "ImageLink",
    "Museum",
    "MuseumHours",
    "Painting",
    "Price",
    "Subject",
]
