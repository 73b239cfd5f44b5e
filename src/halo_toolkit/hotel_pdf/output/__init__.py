"""Document emitter: PDF rendering, watermark pass and file output."""

from __future__ import annotations

from .renderer import render_document
from .overlay import apply_watermark, build_watermark_page
from .writer import save_pdf

__all__ = [
    "render_document",
    "apply_watermark",
    "build_watermark_page",
    "save_pdf",
]
