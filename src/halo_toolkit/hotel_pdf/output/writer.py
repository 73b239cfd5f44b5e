"""
Module: hotel_pdf.output.writer

Purpose:
    Write finished PDF bytes to disk. The file appears complete or not
    at all: content goes to a temporary sibling first and is then moved
    into place.

Key Functions:
    - save_pdf(): Main entry point

Dependencies:
    - pathlib, tempfile, os (std)

Used By:
    - hotel_pdf.controller: Final pipeline step
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from halo_toolkit.hotel_pdf.errors import BuildError

logger = logging.getLogger(__name__)


def save_pdf(pdf_bytes: bytes, output_dir: Path, filename: str) -> Path:
    """
    Save PDF bytes as `output_dir / filename`.

    Args:
        pdf_bytes: PDF content
        output_dir: Target directory (created if missing)
        filename: File name, e.g. from output_filename()

    Returns:
        Path to the written file

    Raises:
        BuildError: If the directory or file cannot be written
    """
    output_dir = Path(output_dir)
    output_path = output_dir / filename
    tmp_name = None
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=output_dir, prefix=".", suffix=".part", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(pdf_bytes)
        os.replace(tmp_name, output_path)
    except OSError as e:
        logger.error(f"Could not write {output_path}: {e}")
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise BuildError() from e

    logger.info(f"Saved {output_path} ({len(pdf_bytes)} bytes)")
    return output_path
