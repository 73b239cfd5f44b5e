"""
Module: hotel_pdf.layout.text

Purpose:
    Text helpers for layout: highlight splitting, link truncation and
    width-based wrapping using reportlab font metrics.

Key Functions:
    - split_highlights(): Notes -> ordered bullet items
    - truncate_text(): Fixed character budget with ellipsis
    - wrap_text(): Break text into lines that fit a width
    - text_width(): Rendered width of a string

Dependencies:
    - reportlab: Font metrics (pdfmetrics, simpleSplit)

Used By:
    - hotel_pdf.layout.composer
"""

from __future__ import annotations

import re
from typing import List, Optional

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

ELLIPSIS = "..."
_HIGHLIGHT_SEPARATORS = re.compile(r"[;\n]")


def split_highlights(notes: Optional[str]) -> List[str]:
    """
    Split free-text notes into highlight items.

    Splits on ';' or newline, trims each fragment, drops empty ones and
    keeps the original order.

    Example:
        >>> split_highlights("Pool; Free breakfast\\n\\n Spa ;")
        ['Pool', 'Free breakfast', 'Spa']
    """
    if not notes:
        return []
    return [part.strip() for part in _HIGHLIGHT_SEPARATORS.split(notes) if part.strip()]


def truncate_text(text: str, limit: int) -> str:
    """
    Cut text to `limit` characters followed by an ellipsis.

    Example:
        >>> truncate_text("abcdef", 3)
        'abc...'
        >>> truncate_text("abc", 3)
        'abc'
    """
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def text_width(text: str, font: str, size: float) -> float:
    """Rendered width of `text` in points."""
    return stringWidth(text, font, size)


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """
    Wrap text into lines no wider than `max_width` (where possible).

    Words longer than the width are left on their own line by reportlab.
    Always returns at least one line.
    """
    lines = simpleSplit(text, font, size, max_width)
    return lines or [text]


def fit_font_size(
    text: str,
    font: str,
    size: float,
    max_width: float,
    *,
    min_size: float = 6,
) -> float:
    """
    Largest font size <= `size` at which `text` fits `max_width`.

    Never returns less than `min_size`.
    """
    width = text_width(text, font, size)
    if width <= max_width or width == 0:
        return size
    return max(min_size, size * max_width / width)
