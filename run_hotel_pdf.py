#!/usr/bin/env python3
"""Command line launcher for the hotel recommendation PDF builder."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists() and SRC.as_posix() not in sys.path:
    sys.path.insert(0, SRC.as_posix())

from halo_toolkit.common import configure_logging
from halo_toolkit.core.models import BuildRequest
from halo_toolkit.core.schemas import ValidationError
from halo_toolkit.core.utils import load_build_request_json
from halo_toolkit.hotel_pdf.config import BuilderConfig
from halo_toolkit.hotel_pdf.controller import BuildError, build_hotel_pdf_sync
from halo_toolkit.hotel_pdf.extraction import ExtractionClient, ExtractionError, apply_extraction

logger = logging.getLogger("halo_toolkit.cli")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a hotel recommendation PDF from a JSON request.")
    parser.add_argument("request", type=Path, help="Path to the request JSON file")
    parser.add_argument("--output-dir", type=Path, help="Directory for the generated PDF")
    parser.add_argument("--api-base-url", help="Backend base URL (default: HALO_API_BASE_URL)")
    parser.add_argument("--token", help="Bearer token for the backend (default: HALO_API_TOKEN)")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument(
        "--extract",
        action="store_true",
        help="Fetch images from the extraction service for hotels without images",
    )
    return parser.parse_args(argv)


async def _extract(request: BuildRequest, config: BuilderConfig) -> BuildRequest:
    links = [hotel.link for hotel in request.hotels if not hotel.images]
    if not links:
        return request
    async with ExtractionClient(config) as client:
        results = await client.extract_images(links)
    return BuildRequest(
        hotels=tuple(apply_extraction(request.hotels, results)),
        executive_name=request.executive_name,
        client_name=request.client_name,
        destination=request.destination,
        check_in_date=request.check_in_date,
        check_out_date=request.check_out_date,
        cover_image_url=request.cover_image_url,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    config = BuilderConfig.from_env(
        api_base_url=args.api_base_url,
        api_token=args.token,
        output_dir=args.output_dir,
    )

    try:
        request = load_build_request_json(args.request)
    except (ValidationError, OSError) as e:
        logger.error(f"Invalid request: {e}")
        return 1

    if args.extract:
        try:
            request = asyncio.run(_extract(request, config))
        except ExtractionError as e:
            # Build continues with the images already in the request
            logger.warning(f"Image extraction failed: {e.message}")

    try:
        result = build_hotel_pdf_sync(request, config)
    except (ValidationError, BuildError) as e:
        logger.error(str(e))
        return 1

    print(result.pdf_path)
    for warning in result.warnings:
        logger.warning(warning)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
