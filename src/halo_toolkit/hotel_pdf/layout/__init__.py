"""Layout engine and page compositor for hotel recommendation PDFs."""

from __future__ import annotations

from .config import LayoutConfig
from .geometry import fit_box, grid_height, grid_layout, grid_rows, scale_to_fit
from .models import (
    Document,
    DocumentMetadata,
    DrawCommand,
    ImageCommand,
    LayoutBox,
    LinkCommand,
    Page,
    PageKind,
    PlaceholderCommand,
    RectCommand,
    TextCommand,
)
from .paginator import BulletFlow, PageBuilder, flow_bullets
from .text import split_highlights, truncate_text, wrap_text
from .composer import compose_cover, compose_document, compose_hotel, layout_cover, layout_hotel_pages

__all__ = [
    "LayoutConfig",
    # geometry
    "fit_box",
    "grid_height",
    "grid_layout",
    "grid_rows",
    "scale_to_fit",
    # models
    "Document",
    "DocumentMetadata",
    "DrawCommand",
    "ImageCommand",
    "LayoutBox",
    "LinkCommand",
    "Page",
    "PageKind",
    "PlaceholderCommand",
    "RectCommand",
    "TextCommand",
    # paginator
    "BulletFlow",
    "PageBuilder",
    "flow_bullets",
    # text
    "split_highlights",
    "truncate_text",
    "wrap_text",
    # composer
    "compose_cover",
    "compose_document",
    "compose_hotel",
    "layout_cover",
    "layout_hotel_pages",
]
