"""
Module: hotel_pdf.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for placement boxes, draw commands, pages and
    the finished document. Layout produces these; the renderer replays
    them against a reportlab canvas.

Key Classes:
    - LayoutBox: Axis-aligned placement rectangle (points, top-down y)
    - TextCommand / ImageCommand / LinkCommand / RectCommand /
      PlaceholderCommand: Draw commands
    - Page: One output page
    - DocumentMetadata: Cover and filename metadata
    - Document: Ordered pages plus metadata

Dependencies:
    - PIL: Image type (TYPE_CHECKING only)
    - dataclasses (std)

Used By:
    - hotel_pdf.layout.composer: Creates pages
    - hotel_pdf.layout.paginator: Seals pages
    - hotel_pdf.output.renderer: Replays commands
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

if TYPE_CHECKING:
    from PIL import Image

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)


@dataclass(frozen=True)
class LayoutBox:
    """
    Placement rectangle in page coordinates.

    Attributes:
        x: Left edge (points from page left)
        y: Top edge (points from page top)
        width: Width in points
        height: Height in points

    Example:
        >>> box = LayoutBox(10, 20, 100, 50)
        >>> box.bottom
        70
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate box on construction."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Box dimensions must be non-negative: {self.width}x{self.height}")

    @property
    def right(self) -> float:
        """Right edge X coordinate."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge Y coordinate."""
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        """(x, y) of the box center."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, other: "LayoutBox", tolerance: float = 1e-6) -> bool:
        """Check that `other` lies fully inside this box."""
        return (
            other.x >= self.x - tolerance
            and other.y >= self.y - tolerance
            and other.right <= self.right + tolerance
            and other.bottom <= self.bottom + tolerance
        )

    def to_dict(self) -> dict[str, float]:
        """Serialize for JSON."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


# ─────────────────────────────────────────────────────────────────────────────
# Draw Commands
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TextCommand:
    """
    Draw a single line of text.

    Attributes:
        x: Anchor X (left edge, center or right edge depending on align)
        y: Baseline Y (from page top)
        text: Text to draw
        font: reportlab font name
        size: Font size in points
        color: RGB 0-255
        align: "left", "center" or "right"
        role: Semantic tag ("title", "link", "highlight", ...)
    """

    x: float
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 11
    color: RGB = BLACK
    align: str = "left"
    role: Optional[str] = None

    def __post_init__(self) -> None:
        if self.align not in ("left", "center", "right"):
            raise ValueError(f"Unsupported text alignment: {self.align!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "text",
            "x": self.x,
            "y": self.y,
            "text": self.text,
            "font": self.font,
            "size": self.size,
            "color": list(self.color),
            "align": self.align,
            "role": self.role,
        }


@dataclass(frozen=True)
class ImageCommand:
    """
    Draw a decoded image into a box (box already aspect-correct).

    Attributes:
        box: Target rectangle
        source_url: URL the image came from
        image: Decoded Pillow image (not part of equality or to_dict)
    """

    box: LayoutBox
    source_url: str
    image: Optional["Image.Image"] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "image", "box": self.box.to_dict(), "source_url": self.source_url}


@dataclass(frozen=True)
class LinkCommand:
    """Clickable hyperlink area. The URL is never truncated."""

    box: LayoutBox
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "link", "box": self.box.to_dict(), "url": self.url}


@dataclass(frozen=True)
class RectCommand:
    """Filled rectangle."""

    box: LayoutBox
    fill: RGB

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "rect", "box": self.box.to_dict(), "fill": list(self.fill)}


@dataclass(frozen=True)
class PlaceholderCommand:
    """
    Grid cell whose image could not be resolved: filled box plus a
    centred caption.
    """

    box: LayoutBox
    source_url: str
    text: str = "Image unavailable"
    fill: RGB = (240, 240, 240)
    text_color: RGB = (150, 150, 150)
    size: float = 8

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "placeholder",
            "box": self.box.to_dict(),
            "source_url": self.source_url,
            "text": self.text,
        }


DrawCommand = Union[TextCommand, ImageCommand, LinkCommand, RectCommand, PlaceholderCommand]


# ─────────────────────────────────────────────────────────────────────────────
# Pages and Document
# ─────────────────────────────────────────────────────────────────────────────

class PageKind(str, Enum):
    """Page type."""

    COVER = "cover"
    CONTENT = "content"


@dataclass(frozen=True)
class Page:
    """
    One output page.

    Attributes:
        kind: COVER or CONTENT
        commands: Draw commands in paint order
        boxes: Image/placeholder placement boxes on this page
        hotel_index: Index of the hotel this page belongs to (None for cover)
        is_continuation: True for overflow pages of a hotel

    Example:
        >>> page = Page(kind=PageKind.CONTENT, commands=(), hotel_index=0)
        >>> page.placeholder_count
        0
    """

    kind: PageKind
    commands: Tuple[DrawCommand, ...]
    boxes: Tuple[LayoutBox, ...] = ()
    hotel_index: Optional[int] = None
    is_continuation: bool = False

    @property
    def image_count(self) -> int:
        """Number of drawn images."""
        return sum(1 for c in self.commands if isinstance(c, ImageCommand))

    @property
    def placeholder_count(self) -> int:
        """Number of "Image unavailable" cells."""
        return sum(1 for c in self.commands if isinstance(c, PlaceholderCommand))

    @property
    def links(self) -> Tuple[LinkCommand, ...]:
        """Hyperlinks on this page."""
        return tuple(c for c in self.commands if isinstance(c, LinkCommand))

    def texts(self, role: Optional[str] = None) -> Tuple[TextCommand, ...]:
        """Text commands, optionally filtered by role."""
        return tuple(
            c for c in self.commands
            if isinstance(c, TextCommand) and (role is None or c.role == role)
        )

    def has_text(self, role: str) -> bool:
        """Check whether any text with `role` is drawn."""
        return bool(self.texts(role))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON (images are referenced by URL only)."""
        return {
            "kind": self.kind.value,
            "hotel_index": self.hotel_index,
            "is_continuation": self.is_continuation,
            "boxes": [b.to_dict() for b in self.boxes],
            "commands": [c.to_dict() for c in self.commands],
        }


@dataclass(frozen=True)
class DocumentMetadata:
    """Metadata carried from the request to the emitter."""

    generated_on: date
    executive_name: Optional[str] = None
    client_name: Optional[str] = None
    destination: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    cover_image_url: Optional[str] = None


@dataclass(frozen=True)
class Document:
    """
    Finished layout: cover first, then hotel pages in input order.

    Attributes:
        pages: Ordered pages
        metadata: Request metadata
    """

    pages: Tuple[Page, ...]
    metadata: DocumentMetadata

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self.pages)

    def pages_for_hotel(self, hotel_index: int) -> Tuple[Page, ...]:
        """Primary and continuation pages of one hotel."""
        return tuple(p for p in self.pages if p.hotel_index == hotel_index)
