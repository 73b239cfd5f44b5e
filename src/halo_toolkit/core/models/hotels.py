"""
Module: hotels

Purpose:
    Provides the HotelEntry and BuildRequest dataclasses - the input
    to one hotel recommendation document build.

Key Classes:
    - HotelEntry: One hotel with its booking link and candidate images
    - BuildRequest: Ordered hotels plus cover/filename metadata

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - core.schemas.validator: ValidationError, URL check

Used By:
    - core.utils.serialization
    - hotel_pdf.layout.composer
    - hotel_pdf.controller
    - hotel_pdf.extraction
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple

from ..schemas.validator import ValidationError, is_absolute_url

# A hotel's image grid never shows more than this many images
MAX_GRID_IMAGES = 6


@dataclass(frozen=True)
class HotelEntry:
    """
    One hotel in a recommendation document (immutable).

    Attributes:
        link: Booking link, must be an absolute http(s) URL
        name: Display name (optional)
        price: Free-text rate, e.g. "$320/night" (optional)
        notes: Free-text highlights separated by ';' or newlines (optional)
        images: Candidate image URLs in display priority order

    Invariants:
        - link is an absolute http(s) URL
        - images keeps every supplied URL; only the grid is capped

    Example:
        >>> entry = HotelEntry(link="https://a.test", images=("i1", "i2"))
        >>> entry.display_name(0)
        'Hotel Option 1'
    """

    link: str
    name: Optional[str] = None
    price: Optional[str] = None
    notes: Optional[str] = None
    images: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate entry on construction."""
        if not isinstance(self.link, str) or not is_absolute_url(self.link.strip()):
            raise ValidationError(
                f"Hotel link must be a valid absolute URL: {self.link!r}",
                path="link",
            )
        # Accept lists from callers but store a tuple
        if not isinstance(self.images, tuple):
            object.__setattr__(self, "images", tuple(self.images))

    def display_name(self, index: int) -> str:
        """Name shown in the page title, falling back to a numbered option."""
        if self.name and self.name.strip():
            return self.name.strip()
        return f"Hotel Option {index + 1}"

    @property
    def grid_images(self) -> Tuple[str, ...]:
        """Images that take part in the grid (first MAX_GRID_IMAGES)."""
        return self.images[:MAX_GRID_IMAGES]

    def with_images(self, images: Tuple[str, ...]) -> "HotelEntry":
        """Return a copy of this entry with a new candidate image list."""
        return replace(self, images=tuple(images))


@dataclass(frozen=True)
class BuildRequest:
    """
    Everything needed to build one hotel recommendation PDF (immutable).

    Attributes:
        hotels: Hotel entries in output order (non-empty)
        executive_name: Account executive preparing the document
        client_name: Client the document is for (drives the filename)
        destination: City/region used in the cover title and filename
        check_in_date: Drives the "For {Month YYYY}" cover suffix
        check_out_date: Informational only
        cover_image_url: Preferred cover image

    Invariants:
        - hotels is non-empty
        - check_out_date is not before check_in_date

    Example:
        >>> req = BuildRequest(hotels=(HotelEntry(link="https://a.test"),))
        >>> req.hotel_count
        1
    """

    hotels: Tuple[HotelEntry, ...]
    executive_name: Optional[str] = None
    client_name: Optional[str] = None
    destination: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    cover_image_url: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate request on construction."""
        if not isinstance(self.hotels, tuple):
            object.__setattr__(self, "hotels", tuple(self.hotels))
        if not self.hotels:
            raise ValidationError("No hotels to export", path="hotels")
        for i, hotel in enumerate(self.hotels):
            if not isinstance(hotel, HotelEntry):
                raise ValidationError(
                    f"Expected HotelEntry, got {type(hotel).__name__}",
                    path=f"hotels[{i}]",
                )
        if (
            self.check_in_date is not None
            and self.check_out_date is not None
            and self.check_out_date < self.check_in_date
        ):
            raise ValidationError(
                f"check_out_date {self.check_out_date} is before check_in_date {self.check_in_date}",
                path="check_out_date",
            )

    @property
    def hotel_count(self) -> int:
        """Number of hotels in the request."""
        return len(self.hotels)

    @property
    def links(self) -> list[str]:
        """Booking links in hotel order."""
        return [hotel.link for hotel in self.hotels]
