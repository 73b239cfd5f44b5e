"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .path_utils import (
    DEFAULT_SLUG,
    FILENAME_PREFIX,
    MAX_SLUG_LENGTH,
    output_filename,
    slugify,
)
from .logging_utils import configure_logging

__all__ = [
    # path_utils
    "DEFAULT_SLUG",
    "FILENAME_PREFIX",
    "MAX_SLUG_LENGTH",
    "output_filename",
    "slugify",
    # logging_utils
    "configure_logging",
]
