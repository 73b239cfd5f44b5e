"""
Module: hotel_pdf.output.renderer

Purpose:
    Render a Document to PDF bytes using ReportLab.
    Each Page becomes one PDF page; its draw commands are replayed in
    order. Layout coordinates are top-down and are flipped here.

Key Functions:
    - render_document(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - hotel_pdf.layout.models: Document, Page, draw commands

Used By:
    - hotel_pdf.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from halo_toolkit.hotel_pdf.layout.config import LayoutConfig
from halo_toolkit.hotel_pdf.layout.models import (
    Document,
    DrawCommand,
    ImageCommand,
    LayoutBox,
    LinkCommand,
    Page,
    PlaceholderCommand,
    RectCommand,
    TextCommand,
)

logger = logging.getLogger(__name__)

JPEG_QUALITY = 85


def render_document(
    document: Document,
    layout: Optional[LayoutConfig] = None,
    *,
    title: Optional[str] = None,
    author: Optional[str] = None,
) -> bytes:
    """
    Render a document to PDF bytes.

    Args:
        document: Composed document (cover first)
        layout: Page geometry (A4 defaults)
        title: PDF title metadata
        author: PDF author metadata

    Returns:
        PDF file content

    Example:
        >>> pdf = render_document(document)
        >>> pdf[:5]
        b'%PDF-'
    """
    layout = layout or LayoutConfig()
    page_size = (layout.page_width, layout.page_height)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_size)
    if title:
        c.setTitle(title)
    if author:
        c.setAuthor(author)

    for page in document.pages:
        _render_page(c, page, layout.page_height)
        c.showPage()

    c.save()
    pdf = buf.getvalue()
    logger.info(f"Rendered {document.page_count} pages ({len(pdf)} bytes)")
    return pdf


def _render_page(c: canvas.Canvas, page: Page, page_height_pt: float) -> None:
    """
    Render a single page to the canvas.

    Args:
        c: ReportLab canvas
        page: Page with draw commands
        page_height_pt: Page height in points (for the Y flip)
    """
    for command in page.commands:
        _draw(c, command, page_height_pt)


def _draw(c: canvas.Canvas, command: DrawCommand, page_height_pt: float) -> None:
    if isinstance(command, TextCommand):
        _draw_text(c, command, page_height_pt)
    elif isinstance(command, ImageCommand):
        _draw_image(c, command, page_height_pt)
    elif isinstance(command, LinkCommand):
        x1, y1, x2, y2 = _box_rect(command.box, page_height_pt)
        c.linkURL(command.url, (x1, y1, x2, y2), relative=0, thickness=0)
    elif isinstance(command, PlaceholderCommand):
        _draw_placeholder(c, command, page_height_pt)
    elif isinstance(command, RectCommand):
        _draw_rect(c, command.box, command.fill, page_height_pt)
    else:
        raise TypeError(f"Unknown draw command: {type(command).__name__}")


def _draw_text(c: canvas.Canvas, command: TextCommand, page_height_pt: float) -> None:
    c.saveState()
    c.setFont(command.font, command.size)
    c.setFillColorRGB(*_rgb(command.color))

    y_pt = page_height_pt - command.y
    if command.align == "center":
        c.drawCentredString(command.x, y_pt, command.text)
    elif command.align == "right":
        c.drawRightString(command.x, y_pt, command.text)
    else:
        c.drawString(command.x, y_pt, command.text)
    c.restoreState()


def _draw_image(c: canvas.Canvas, command: ImageCommand, page_height_pt: float) -> None:
    if command.image is None:
        raise ValueError(f"Image command without decoded image: {command.source_url}")
    box = command.box
    c.drawImage(
        _pil_to_reader(command.image),
        box.x,
        _transform_y(page_height_pt, box.y, box.height),
        width=box.width,
        height=box.height,
    )


def _draw_placeholder(c: canvas.Canvas, command: PlaceholderCommand, page_height_pt: float) -> None:
    box = command.box
    _draw_rect(c, box, command.fill, page_height_pt)

    c.saveState()
    c.setFont("Helvetica", command.size)
    c.setFillColorRGB(*_rgb(command.text_color))
    center_x, center_y = box.center
    c.drawCentredString(center_x, page_height_pt - center_y, command.text)
    c.restoreState()


def _draw_rect(
    c: canvas.Canvas,
    box: LayoutBox,
    fill: Tuple[int, int, int],
    page_height_pt: float,
) -> None:
    c.saveState()
    c.setFillColorRGB(*_rgb(fill))
    c.rect(
        box.x,
        _transform_y(page_height_pt, box.y, box.height),
        box.width,
        box.height,
        stroke=0,
        fill=1,
    )
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object (RGB)

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.convert("RGB").save(buf, format="JPEG", quality=JPEG_QUALITY)
    buf.seek(0)
    return ImageReader(buf)


def _rgb(color: Tuple[int, int, int]) -> Tuple[float, float, float]:
    """0-255 RGB to ReportLab 0-1 floats."""
    r, g, b = color
    return (r / 255.0, g / 255.0, b / 255.0)


def _box_rect(box: LayoutBox, page_height_pt: float) -> Tuple[float, float, float, float]:
    """(x1, y1, x2, y2) of a box in bottom-up PDF coordinates."""
    return (box.x, page_height_pt - box.bottom, box.right, page_height_pt - box.y)


def _transform_y(page_height_pt: float, y_top: float, height: float) -> float:
    """
    Convert top-down Y coordinate to bottom-up PDF Y.

    Args:
        page_height_pt: Page height in points
        y_top: Y position from top in points
        height: Height of element in points

    Returns:
        Y of the element's lower edge from the page bottom
    """
    return page_height_pt - y_top - height
