"""
Module: hotel_pdf.layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page dimensions, margins, grid geometry and line advances.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Coordinates:
    All values are PDF points. Y is measured from the top of the page
    (the renderer flips it). Defaults reproduce the dashboard's A4
    layout, which was specified in millimetres.

Dependencies:
    - reportlab: A4 size and mm unit

Used By:
    - hotel_pdf.layout.composer: Page composition
    - hotel_pdf.layout.paginator: Continuation pages
    - hotel_pdf.output.renderer: Page size
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

A4_WIDTH_PT, A4_HEIGHT_PT = A4


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin: Left/right/top content margin
        bottom_reserve: Space below the last highlight line
        gutter: Gap between grid columns and between grid rows
        grid_row_height: Height of one grid cell
        max_grid_cells: Grid capacity
        grid_columns: Grid column count
        brand_baseline: Baseline of the brand mark
        title_baseline: Baseline of a hotel page title
        content_top: First content line of a hotel page
        after_grid_spacing: Space between grid and link line
        no_images_advance: Advance after the "no images" message
        line_advance: Advance after the link and price lines
        highlights_header_advance: Advance after "Highlights:"
        bullet_line_height: Advance per highlight line
        bullet_indent: Highlight indent from the margin
        link_label_width: Gap between "Location:" and the hyperlink
        cover_image_ratio: Max cover image height / page height
        cover_title_ratio: Title position without a cover image
        cover_title_ratio_with_image: Title position with a cover image
        date_stamp_offset: Gap between the cover title and the date stamp

    Example:
        >>> config = LayoutConfig()
        >>> round(config.available_width, 2)
        481.89
    """

    # Page dimensions
    page_width: float = A4_WIDTH_PT
    page_height: float = A4_HEIGHT_PT

    # Margins
    margin: float = 20 * mm
    bottom_reserve: float = 30 * mm

    # Image grid
    gutter: float = 10 * mm
    grid_row_height: float = 60 * mm
    max_grid_cells: int = 6
    grid_columns: int = 2

    # Hotel page cursor positions
    brand_baseline: float = 15 * mm
    title_baseline: float = 30 * mm
    content_top: float = 45 * mm
    after_grid_spacing: float = 15 * mm
    no_images_advance: float = 15 * mm
    line_advance: float = 8 * mm
    highlights_header_advance: float = 7 * mm
    bullet_line_height: float = 6 * mm
    bullet_indent: float = 5 * mm
    link_label_width: float = 30 * mm

    # Cover page
    cover_image_ratio: float = 0.5
    cover_title_ratio: float = 0.4
    cover_title_ratio_with_image: float = 0.6
    date_stamp_offset: float = 15 * mm

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.available_width <= self.gutter:
            raise ValueError("Margins exceed page width")
        if self.page_bottom <= self.margin:
            raise ValueError("Margins exceed page height")
        if self.grid_columns < 1 or self.max_grid_cells < 1:
            raise ValueError("Grid needs at least one column and one cell")
        if self.bullet_line_height <= 0 or self.grid_row_height <= 0:
            raise ValueError("Line and row heights must be positive")

    @property
    def available_width(self) -> float:
        """Width available for content (excluding left/right margins)."""
        return self.page_width - 2 * self.margin

    @property
    def page_bottom(self) -> float:
        """Lowest baseline a highlight line may use before breaking."""
        return self.page_height - self.bottom_reserve

    @property
    def content_bottom(self) -> float:
        """Lowest baseline any line may use (bottom margin)."""
        return self.page_height - self.margin

    @property
    def content_right(self) -> float:
        """Right edge of the content area."""
        return self.page_width - self.margin
