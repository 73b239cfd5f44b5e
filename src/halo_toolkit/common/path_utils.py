"""Path and filename utilities.

Provides the deterministic slug and filename used for downloaded
hotel recommendation PDFs.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from typing import Optional

FILENAME_PREFIX = "hotel-recommendations"
DEFAULT_SLUG = "hotels"
MAX_SLUG_LENGTH = 20


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Convert free text to a short, filesystem-safe slug.

    Accented characters are folded to their ASCII base letter, everything
    else outside ``[a-z0-9]`` becomes ``-``, runs of ``-`` collapse, and the
    result is cut to ``max_length`` characters. The mapping is pure, so the
    same input always yields the same slug.

    Args:
        text: Source text (client name or destination).
        max_length: Maximum slug length.

    Returns:
        Slug string, possibly empty if ``text`` has no usable characters.

    Examples:
        >>> slugify("Jöhn's Trip!!")
        'john-s-trip'
        >>> slugify("New York City Marathon Weekend")
        'new-york-city-marath'
    """
    folded = unicodedata.normalize("NFKD", text or "")
    folded = folded.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", folded).strip("-")
    return slug[:max_length].rstrip("-")


def output_filename(
    client_name: Optional[str],
    destination: Optional[str],
    on: date,
) -> str:
    """Build the download filename for a hotel recommendation PDF.

    The slug comes from the first of client name and destination that
    yields a non-empty slug, else the literal ``hotels``.

    Args:
        client_name: Client the document is for.
        destination: Destination city/region.
        on: Build date used as the filename date stamp.

    Returns:
        ``hotel-recommendations-{slug}-{YYYY-MM-DD}.pdf``

    Examples:
        >>> output_filename("Acme Corp", None, date(2026, 3, 1))
        'hotel-recommendations-acme-corp-2026-03-01.pdf'
        >>> output_filename(None, None, date(2026, 3, 1))
        'hotel-recommendations-hotels-2026-03-01.pdf'
    """
    slug = DEFAULT_SLUG
    for source in (client_name, destination):
        candidate = slugify(source) if source else ""
        if candidate:
            slug = candidate
            break
    return f"{FILENAME_PREFIX}-{slug}-{on.isoformat()}.pdf"
