"""
Module: hotel_pdf.layout.composer

Purpose:
    Turn a BuildRequest into an ordered, immutable Document.
    Resolves each hotel's images through the AssetResolver, then lays the
    page out with pure functions so the same assets always give the same
    pages.

Key Functions:
    - compose_document(): Cover page plus pages for every hotel
    - compose_cover(): Resolve the cover image and lay out the cover
    - compose_hotel(): Resolve one hotel's grid and lay out its pages
    - layout_cover() / layout_hotel_pages(): Pure layout given assets

Dependencies:
    - halo_toolkit.core.models: BuildRequest, HotelEntry, ImageAsset
    - hotel_pdf.images: AssetResolver
    - hotel_pdf.layout: geometry, paginator, text

Used By:
    - hotel_pdf.controller: Main build controller
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from halo_toolkit.core.models import BuildRequest, HotelEntry, ImageAsset
from halo_toolkit.hotel_pdf.config import BuilderConfig
from halo_toolkit.hotel_pdf.images import AssetResolver

from .config import LayoutConfig
from .geometry import fit_box, grid_height, grid_layout, scale_to_fit
from .models import (
    Document,
    DocumentMetadata,
    ImageCommand,
    LayoutBox,
    LinkCommand,
    Page,
    PageKind,
    PlaceholderCommand,
    TextCommand,
)
from .paginator import PageBuilder
from .text import fit_font_size, split_highlights, text_width, truncate_text, wrap_text

logger = logging.getLogger(__name__)

# English month names, independent of the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

BLACK = (0, 0, 0)
TITLE_GREY = (60, 60, 60)
DATE_GREY = (100, 100, 100)
MUTED_GREY = (150, 150, 150)
LINK_BLUE = (59, 130, 246)

BULLET = "• "
NO_IMAGES_TEXT = "No images available for this hotel"
LINK_PREFIX = "(Map hyperlink) "

COVER_TITLE_SIZE = 24
COVER_TITLE_LEADING = 1.15
HOTEL_TITLE_SIZE = 18
BODY_SIZE = 11
BULLET_SIZE = 10
MIN_LINK_SIZE = 7


@dataclass(frozen=True)
class BulletLine:
    """One wrapped highlight line; `indent` offsets wrapped continuation lines."""

    text: str
    indent: float = 0.0


# ─────────────────────────────────────────────────────────────────────────────
# Async composition (resolves assets)
# ─────────────────────────────────────────────────────────────────────────────

async def compose_document(
    request: BuildRequest,
    resolver: AssetResolver,
    config: BuilderConfig,
    *,
    layout: Optional[LayoutConfig] = None,
    today: Optional[date] = None,
) -> Document:
    """
    Compose the whole document: cover first, then each hotel in order.

    Hotels are composed strictly one after another; hotel N+1 starts
    resolving only after hotel N's pages exist.

    Args:
        request: Validated build request
        resolver: Asset resolver owned by this build
        config: Builder configuration (branding, link length)
        layout: Page geometry (A4 defaults)
        today: Build date (defaults to date.today())

    Returns:
        Immutable Document
    """
    layout = layout or LayoutConfig()
    metadata = _metadata(request, today or date.today())

    pages: List[Page] = [await compose_cover(request, resolver, config, layout, metadata)]
    for index, entry in enumerate(request.hotels):
        pages.extend(await compose_hotel(entry, index, resolver, config, layout))

    logger.info(f"Composed {len(pages)} pages for {request.hotel_count} hotels")
    return Document(pages=tuple(pages), metadata=metadata)


async def compose_cover(
    request: BuildRequest,
    resolver: AssetResolver,
    config: BuilderConfig,
    layout: LayoutConfig,
    metadata: DocumentMetadata,
) -> Page:
    """
    Resolve the cover image and lay out the cover page.

    Candidates are the request's cover_image_url followed by the first
    hotel's grid images; the first one that loads is used.
    """
    candidates: List[str] = []
    if request.cover_image_url:
        candidates.append(request.cover_image_url)
    candidates.extend(url for url in request.hotels[0].grid_images if url not in candidates)

    cover_asset: Optional[ImageAsset] = None
    for url in candidates:
        asset = await resolver.resolve(url)
        if asset.is_loaded:
            cover_asset = asset
            break
    if cover_asset is None:
        logger.info("No cover image available; cover uses text only")
    else:
        logger.debug(f"Cover image: {cover_asset.source_url}")

    return layout_cover(metadata, cover_asset, config, layout)


async def compose_hotel(
    entry: HotelEntry,
    index: int,
    resolver: AssetResolver,
    config: BuilderConfig,
    layout: LayoutConfig,
) -> List[Page]:
    """Resolve one hotel's grid images (sequentially) and lay out its pages."""
    assets = await resolver.resolve_many(entry.grid_images[:layout.max_grid_cells])
    loaded = sum(1 for asset in assets if asset.is_loaded)
    logger.info(
        f"Hotel {index + 1} ({entry.display_name(index)}): "
        f"{loaded}/{len(assets)} images loaded"
    )
    return layout_hotel_pages(entry, index, assets, config, layout)


# ─────────────────────────────────────────────────────────────────────────────
# Pure layout
# ─────────────────────────────────────────────────────────────────────────────

def layout_cover(
    metadata: DocumentMetadata,
    cover_asset: Optional[ImageAsset],
    config: BuilderConfig,
    layout: LayoutConfig,
) -> Page:
    """
    Lay out the cover page.

    Args:
        metadata: Request metadata (destination, dates)
        cover_asset: LOADED cover image or None
        config: Builder configuration
        layout: Page geometry

    Returns:
        COVER page
    """
    builder = PageBuilder(layout, kind=PageKind.COVER)

    if cover_asset is not None and cover_asset.is_loaded:
        width, height = scale_to_fit(
            cover_asset.native_size,
            (layout.page_width, layout.page_height * layout.cover_image_ratio),
        )
        box = LayoutBox(0, 0, width, height)
        builder.add(ImageCommand(box, cover_asset.source_url, cover_asset.image))
        builder.add_box(box)
        title_ratio = layout.cover_title_ratio_with_image
    else:
        title_ratio = layout.cover_title_ratio

    builder.add(brand_mark(config, layout))

    center_x = layout.page_width / 2
    y = layout.page_height * title_ratio
    lines = wrap_text(cover_title(metadata), FONT_BOLD, COVER_TITLE_SIZE, layout.available_width)
    for i, line in enumerate(lines):
        if i:
            y += COVER_TITLE_SIZE * COVER_TITLE_LEADING
        builder.add(TextCommand(
            center_x, y, line, FONT_BOLD, COVER_TITLE_SIZE, TITLE_GREY, "center", "title",
        ))

    builder.add(TextCommand(
        center_x, y + layout.date_stamp_offset, date_stamp(metadata.generated_on),
        FONT, 12, DATE_GREY, "center", "date",
    ))
    return builder.finish()[0]


def layout_hotel_pages(
    entry: HotelEntry,
    index: int,
    assets: Sequence[ImageAsset],
    config: BuilderConfig,
    layout: LayoutConfig,
) -> List[Page]:
    """
    Lay out one hotel: primary page plus any continuation pages.

    Args:
        entry: Hotel to lay out
        index: Zero-based position of the hotel in the request
        assets: Resolved grid images, in grid order
        config: Builder configuration
        layout: Page geometry

    Returns:
        Pages for this hotel (first is the primary page)
    """
    builder = PageBuilder(layout, hotel_index=index, header=(brand_mark(config, layout),))
    m = layout.margin

    title = f"{index + 1}. {entry.display_name(index).upper()}"
    title_size = fit_font_size(title, FONT_BOLD, HOTEL_TITLE_SIZE, layout.available_width, min_size=12)
    builder.add(TextCommand(m, layout.title_baseline, title, FONT_BOLD, title_size, BLACK, role="hotel-title"))
    builder.y = layout.content_top

    grid = list(assets)[:layout.max_grid_cells]
    if not any(asset.is_loaded for asset in grid):
        builder.add(TextCommand(
            m, builder.y, NO_IMAGES_TEXT, FONT_ITALIC, 10, MUTED_GREY, role="no-images",
        ))
        builder.advance(layout.no_images_advance)
    else:
        _layout_grid(builder, grid, layout)

    # Link and rate may run past page_bottom, never into the bottom margin
    builder.ensure_room(layout.content_bottom)
    _layout_link(builder, entry.link, config, layout)

    if entry.price and entry.price.strip():
        builder.ensure_room(layout.content_bottom)
        builder.add(TextCommand(m, builder.y, f"Rate: {entry.price.strip()}", FONT, BODY_SIZE, BLACK, role="price"))
        builder.advance(layout.line_advance)

    highlights = split_highlights(entry.notes)
    if highlights:
        # Header moves with its first bullet
        builder.ensure_room()
        builder.add(TextCommand(m, builder.y, "Highlights:", FONT_BOLD, BODY_SIZE, BLACK, role="highlights-header"))
        builder.advance(layout.highlights_header_advance)
        x = m + layout.bullet_indent
        builder.flow(
            bullet_lines(highlights, layout.available_width - layout.bullet_indent),
            lambda line, y: TextCommand(
                x + line.indent, y, line.text, FONT, BULLET_SIZE, TITLE_GREY, role="highlight",
            ),
            layout.bullet_line_height,
        )

    pages = builder.finish()
    if len(pages) > 1:
        logger.debug(f"Hotel {index + 1} spans {len(pages)} pages")
    return pages


def _layout_grid(builder: PageBuilder, assets: List[ImageAsset], layout: LayoutConfig) -> None:
    area = LayoutBox(layout.margin, builder.y, layout.available_width, layout.grid_row_height)
    cells = grid_layout(
        len(assets),
        area,
        gutter=layout.gutter,
        row_height=layout.grid_row_height,
        max_cells=layout.max_grid_cells,
        columns=layout.grid_columns,
    )
    for asset, cell in zip(assets, cells):
        if asset.is_loaded:
            box = fit_box(asset.native_size, cell)
            builder.add(ImageCommand(box, asset.source_url, asset.image))
        else:
            box = cell
            builder.add(PlaceholderCommand(box, asset.source_url))
        builder.add_box(box)

    builder.advance(grid_height(
        len(assets),
        layout.grid_row_height,
        layout.gutter,
        max_cells=layout.max_grid_cells,
        columns=layout.grid_columns,
    ) + layout.after_grid_spacing)


def _layout_link(builder: PageBuilder, url: str, config: BuilderConfig, layout: LayoutConfig) -> None:
    m = layout.margin
    y = builder.y
    builder.add(TextCommand(m, y, "Location:", FONT, BODY_SIZE, BLACK, role="link-label"))

    x = m + layout.link_label_width
    text = LINK_PREFIX + truncate_text(url, config.link_display_chars)
    size = fit_font_size(text, FONT, BODY_SIZE, layout.content_right - x, min_size=MIN_LINK_SIZE)
    builder.add(TextCommand(x, y, text, FONT, size, LINK_BLUE, role="link"))
    # Box spans ascent and descent around the baseline
    builder.add(LinkCommand(LayoutBox(x, y - size, text_width(text, FONT, size), size * 1.25), url))
    builder.advance(layout.line_advance)


# ─────────────────────────────────────────────────────────────────────────────
# Text helpers
# ─────────────────────────────────────────────────────────────────────────────

def brand_mark(config: BuilderConfig, layout: LayoutConfig) -> TextCommand:
    """Brand text right-aligned at the top of a page."""
    return TextCommand(
        layout.content_right, layout.brand_baseline, config.brand_name,
        FONT_BOLD, 10, BLACK, "right", "brand",
    )


def cover_title(metadata: DocumentMetadata) -> str:
    """
    Cover title with its month suffix.

    Example:
        >>> cover_title(DocumentMetadata(date(2025, 3, 1), destination="Paris"))
        'Selection of Hotels in Paris For March 2025'
    """
    destination = (metadata.destination or "").strip()
    title = f"Selection of Hotels in {destination}" if destination else "Hotel Recommendations"
    month = metadata.check_in_date or metadata.generated_on
    return f"{title} For {MONTH_NAMES[month.month - 1]} {month.year}"


def date_stamp(on: date) -> str:
    """MM/DD/YYYY date stamp."""
    return f"{on.month:02d}/{on.day:02d}/{on.year}"


def bullet_lines(highlights: Sequence[str], max_width: float) -> List[BulletLine]:
    """
    Wrap highlights into bullet lines.

    The first line of each highlight carries the bullet; wrapped lines
    are indented to align with the text after it.
    """
    indent = text_width(BULLET, FONT, BULLET_SIZE)
    lines: List[BulletLine] = []
    for item in highlights:
        wrapped = wrap_text(item, FONT, BULLET_SIZE, max_width - indent)
        lines.append(BulletLine(BULLET + wrapped[0]))
        lines.extend(BulletLine(part, indent) for part in wrapped[1:])
    return lines


def _metadata(request: BuildRequest, today: date) -> DocumentMetadata:
    return DocumentMetadata(
        generated_on=today,
        executive_name=request.executive_name,
        client_name=request.client_name,
        destination=request.destination,
        check_in_date=request.check_in_date,
        check_out_date=request.check_out_date,
        cover_image_url=request.cover_image_url,
    )
