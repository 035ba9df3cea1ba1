"""
Domain models for the paintings EDA toolkit.

Mirror the externally owned tables (see `db/init.sql` for the fixture
schema). The models are read-only views used for validation, typing and
seeding; nothing here writes field values back to the database.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Artist(BaseModel):
    """A row of the `artist` table."""

    artist_id: int
    full_name: str
    first_name: Optional[str] = None
    middle_names: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    style: Optional[str] = None
    birth: Optional[int] = None
    death: Optional[int] = None

    model_config = _FROZEN


class Museum(BaseModel):
    """A row of the `museum` table."""

    museum_id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    url: Optional[str] = None

    model_config = _FROZEN

    @property
    def has_valid_city(self) -> bool:
        """City names starting with a digit are postal codes typed in the wrong column."""
        return bool(self.city) and not self.city[0].isdigit()


class MuseumHours(BaseModel):
    """
    One opening-hours entry; the logical key is (museum_id, day).

    `open` and `close` keep the dataset's text form, e.g. "09:00:AM".
    """

    museum_id: int
    day: str
    open: str
    close: str

    model_config = _FROZEN


class Painting(BaseModel):
    """A row of the `work` table; `museum_id` is None when not on display."""

    work_id: int
    name: str
    artist_id: Optional[int] = None
    style: Optional[str] = None
    museum_id: Optional[int] = None

    model_config = _FROZEN

    @property
    def on_display(self) -> bool:
        return self.museum_id is not None


class CanvasSize(BaseModel):
    size_id: int
    width: Optional[int] = None
    height: Optional[int] = None
    label: str

    model_config = _FROZEN


class Price(BaseModel):
    """
    A row of the `product_size` table, keyed by (work_id, size_id).

    The dataset stores both ids as text. `sale_price <= regular_price` is
    expected but not enforced.
    """

    work_id: str
    size_id: str
    sale_price: Decimal = Field(..., ge=0)
    regular_price: Decimal = Field(..., ge=0)

    model_config = _FROZEN

    @property
    def is_discounted(self) -> bool:
        return self.sale_price < self.regular_price

    @property
    def discount_ratio(self) -> Optional[Decimal]:
        """Sale price as a fraction of the regular price."""
        if not self.regular_price:
            return None
        return self.sale_price / self.regular_price


class Subject(BaseModel):
    work_id: str
    subject: str

    model_config = _FROZEN


class ImageLink(BaseModel):
    work_id: int
    url: Optional[str] = None
    thumbnail_small_url: Optional[str] = None
    thumbnail_large_url: Optional[str] = None

    model_config = _FROZEN


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
