"""
Module: hotel_pdf.controller

Purpose:
    Orchestrate the complete hotel recommendation build.
    Validate → Resolve/Compose → Render → Watermark → Save

Key Functions:
    - build_hotel_pdf(): Main async entry point
    - build_hotel_pdf_sync(): asyncio.run() wrapper for synchronous callers

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - hotel_pdf.images: Asset resolution
    - hotel_pdf.layout: Composition and pagination
    - hotel_pdf.output: PDF rendering, watermark, file output

Used By:
    - run_hotel_pdf.py: Command line entry point
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import httpx

from halo_toolkit.common.path_utils import output_filename
from halo_toolkit.core.models import BuildRequest
from halo_toolkit.core.schemas.validator import ValidationError
from halo_toolkit.core.utils.serialization import deserialize_build_request

from .config import BuilderConfig
from .errors import BUILD_FAILED_MESSAGE, BuildError
from .images import AssetResolver
from .layout import LayoutConfig, compose_document
from .layout.composer import cover_title
from .output import apply_watermark, render_document, save_pdf

logger = logging.getLogger(__name__)

__all__ = [
    "BUILD_FAILED_MESSAGE",
    "BuildError",
    "BuildResult",
    "build_hotel_pdf",
    "build_hotel_pdf_sync",
]


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to the generated PDF
        filename: File name of the PDF
        page_count: Number of pages generated (cover included)
        hotel_count: Number of hotels in the document
        failed_images: URLs that could not be resolved
        warnings: Human-readable notes about absorbed failures
        elapsed_seconds: Wall-clock build time

    Example:
        >>> result = build_hotel_pdf_sync(request, config)
        >>> print(f"Generated {result.page_count} pages at {result.pdf_path}")
    """

    pdf_path: Path
    filename: str
    page_count: int
    hotel_count: int
    failed_images: tuple[str, ...]
    warnings: tuple[str, ...]
    elapsed_seconds: float


async def build_hotel_pdf(
    request: Union[BuildRequest, Mapping[str, Any]],
    config: Optional[BuilderConfig] = None,
    *,
    layout: Optional[LayoutConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
    today: Optional[date] = None,
) -> BuildResult:
    """
    Build a hotel recommendation PDF from start to finish.

    Pipeline:
    1. Validate the request (raw dicts are deserialized first)
    2. Compose the cover and hotel pages, resolving images sequentially
    3. Render pages to PDF
    4. Stamp the watermark on every page
    5. Save to config.output_dir

    Args:
        request: BuildRequest or raw request payload
        config: Build configuration (defaults to BuilderConfig.from_env())
        layout: Page geometry (A4 defaults)
        client: Optional HTTP client for image fetches (not closed here)
        today: Build date used for the date stamp and filename

    Returns:
        BuildResult with path and statistics

    Raises:
        ValidationError: If the request is invalid (nothing is fetched or drawn)
        BuildError: If any later step fails
    """
    if not isinstance(request, BuildRequest):
        request = deserialize_build_request(dict(request))
    config = config or BuilderConfig.from_env()
    layout = layout or LayoutConfig()
    today = today or date.today()

    start_time = time.perf_counter()
    logger.info(
        f"Starting hotel PDF build: {request.hotel_count} hotels, "
        f"client={request.client_name!r}, destination={request.destination!r}"
    )

    try:
        async with AssetResolver(config, client=client) as resolver:
            document = await compose_document(request, resolver, config, layout=layout, today=today)
            failures = resolver.failures

        pdf = render_document(
            document,
            layout,
            title=cover_title(document.metadata),
            author=request.executive_name or config.brand_name,
        )
        pdf = apply_watermark(pdf, config.watermark_text, opacity=config.watermark_opacity)

        filename = output_filename(request.client_name, request.destination, today)
        pdf_path = save_pdf(pdf, config.output_dir, filename)
    except (BuildError, ValidationError):
        raise
    except Exception as e:
        logger.exception(f"Hotel PDF build failed: {e}")
        raise BuildError(BUILD_FAILED_MESSAGE) from e

    warnings: List[str] = [
        f"Image unavailable: {asset.source_url} ({asset.error})" for asset in failures
    ]
    if warnings:
        logger.warning(f"{len(warnings)} images unavailable; placeholders used")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Built {pdf_path.name}: {document.page_count} pages in {elapsed:.2f}s")

    return BuildResult(
        pdf_path=pdf_path,
        filename=filename,
        page_count=document.page_count,
        hotel_count=request.hotel_count,
        failed_images=tuple(asset.source_url for asset in failures),
        warnings=tuple(warnings),
        elapsed_seconds=elapsed,
    )


def build_hotel_pdf_sync(
    request: Union[BuildRequest, Mapping[str, Any]],
    config: Optional[BuilderConfig] = None,
    **kwargs: Any,
) -> BuildResult:
    """Run build_hotel_pdf() to completion on a fresh event loop."""
    return asyncio.run(build_hotel_pdf(request, config, **kwargs))
