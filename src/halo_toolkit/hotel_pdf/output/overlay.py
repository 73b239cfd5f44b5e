"""
Module: hotel_pdf.output.overlay

Purpose:
    Watermark pass over a finished PDF.
    Draws the marking text once on a one-page ReportLab overlay and
    merges it onto every page of the rendered document with pypdf, after
    all content has been drawn.

Key Functions:
    - apply_watermark(): Stamp every page exactly once
    - build_watermark_page(): One-page overlay PDF for a page size

Dependencies:
    - reportlab: Overlay drawing (rotation, fill alpha)
    - pypdf: Page merging

Used By:
    - hotel_pdf.controller: After render_document()
"""

from __future__ import annotations

import io
import logging
from typing import Dict, Tuple

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.generic import NameObject, TextStringObject
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 10
DEFAULT_COLOR = (200, 200, 200)
DEFAULT_OPACITY = 0.2
DEFAULT_ANGLE = 45
DEFAULT_BOTTOM_OFFSET = 10 * mm

# Private page-dictionary key set on every stamped page
WATERMARK_MARKER = "/HaloWatermark"


def build_watermark_page(
    page_size: Tuple[float, float],
    text: str,
    *,
    font_size: float = DEFAULT_FONT_SIZE,
    color: Tuple[int, int, int] = DEFAULT_COLOR,
    opacity: float = DEFAULT_OPACITY,
    angle: float = DEFAULT_ANGLE,
    bottom_offset: float = DEFAULT_BOTTOM_OFFSET,
) -> PageObject:
    """
    Create a one-page overlay carrying the watermark text.

    The text is centred horizontally, anchored `bottom_offset` above the
    page bottom and rotated by `angle` degrees around that anchor.

    Args:
        page_size: (width, height) in points
        text: Watermark text
        font_size: Font size in points
        color: RGB 0-255
        opacity: Fill alpha (0-1]
        angle: Rotation in degrees, counter-clockwise
        bottom_offset: Anchor height above the page bottom

    Returns:
        pypdf page to merge onto content pages
    """
    width, height = page_size
    packet = io.BytesIO()
    c = canvas.Canvas(packet, pagesize=(width, height))

    c.saveState()
    c.setFont(DEFAULT_FONT, font_size)
    r, g, b = color
    c.setFillColorRGB(r / 255.0, g / 255.0, b / 255.0)
    c.setFillAlpha(opacity)
    c.translate(width / 2, bottom_offset)
    c.rotate(angle)
    c.drawCentredString(0, 0, text)
    c.restoreState()

    c.showPage()
    c.save()
    packet.seek(0)
    return PdfReader(packet).pages[0]


def apply_watermark(
    pdf_bytes: bytes,
    text: str,
    *,
    opacity: float = DEFAULT_OPACITY,
    font_size: float = DEFAULT_FONT_SIZE,
) -> bytes:
    """
    Stamp `text` onto every page of a PDF, cover included.

    Stamped pages carry WATERMARK_MARKER; pages that already have it are
    passed through unchanged, so running this twice stamps each page once.

    Args:
        pdf_bytes: Rendered document
        text: Watermark text
        opacity: Fill alpha (0-1]
        font_size: Font size in points

    Returns:
        New PDF content with the watermark on each page

    Raises:
        ValueError: If opacity is outside (0, 1]
        pypdf.errors.PdfReadError: If `pdf_bytes` is not a PDF

    Example:
        >>> stamped = apply_watermark(pdf, "APEX HAVEN - Internal Use Only")
    """
    if not 0 < opacity <= 1:
        raise ValueError(f"opacity must be in (0, 1]: {opacity}")

    reader = PdfReader(io.BytesIO(pdf_bytes))
    writer = PdfWriter()
    overlays: Dict[Tuple[float, float], PageObject] = {}
    stamped = 0

    for page in reader.pages:
        if WATERMARK_MARKER in page:
            writer.add_page(page)
            continue
        size = (float(page.mediabox.width), float(page.mediabox.height))
        if size not in overlays:
            overlays[size] = build_watermark_page(size, text, font_size=font_size, opacity=opacity)
        page.merge_page(overlays[size])
        page[NameObject(WATERMARK_MARKER)] = TextStringObject(text)
        writer.add_page(page)
        stamped += 1

    if reader.metadata:
        writer.add_metadata({k: v for k, v in reader.metadata.items() if isinstance(v, str)})

    out = io.BytesIO()
    writer.write(out)
    skipped = len(reader.pages) - stamped
    logger.info(f"Watermarked {stamped} pages ({skipped} already stamped)")
    return out.getvalue()
