"""
Hotel recommendation PDF builder.

Pipeline:
    BuildRequest → AssetResolver (proxy, then direct) → compose_document
    → render_document → apply_watermark → save_pdf

Entry points:
    - build_hotel_pdf(): async build
    - build_hotel_pdf_sync(): synchronous wrapper
"""

from __future__ import annotations

from .config import BuilderConfig, DEFAULT_API_BASE_URL
from .errors import BUILD_FAILED_MESSAGE, BuildError
from .controller import BuildResult, build_hotel_pdf, build_hotel_pdf_sync

__all__ = [
    "BuilderConfig",
    "DEFAULT_API_BASE_URL",
    "BUILD_FAILED_MESSAGE",
    "BuildError",
    "BuildResult",
    "build_hotel_pdf",
    "build_hotel_pdf_sync",
]
