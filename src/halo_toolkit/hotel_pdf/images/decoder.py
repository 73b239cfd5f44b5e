"""
Module: hotel_pdf.images.decoder

Purpose:
    Decode downloaded image bytes into embeddable Pillow images.
    Normalizes every mode to RGB so the renderer can embed it as-is.

Key Functions:
    - decode_image(): Decode bytes to an RGB image

Dependencies:
    - PIL: Image decoding

Used By:
    - hotel_pdf.images.resolver: After each successful fetch
"""

from __future__ import annotations

import io
import struct

from PIL import Image, UnidentifiedImageError

# Background used when flattening transparent images
FLATTEN_BACKGROUND = (255, 255, 255)

# Errors Pillow raises while parsing or decoding corrupt image data
_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError,
    SyntaxError,
    EOFError,
    IndexError,
    TypeError,
    struct.error,
)


class ImageDecodeError(Exception):
    """Downloaded bytes are not a decodable raster image."""
    pass


def decode_image(data: bytes) -> Image.Image:
    """
    Decode image bytes into a fully loaded RGB image.

    Transparent images (RGBA, LA, palette with transparency) are
    flattened onto white; everything else is converted to RGB.

    Args:
        data: Raw bytes as downloaded

    Returns:
        Loaded PIL Image in RGB mode (detached from the byte buffer)

    Raises:
        ImageDecodeError: If bytes are empty or not an image

    Example:
        >>> img = decode_image(png_bytes)
        >>> img.mode
        'RGB'
    """
    if not data:
        raise ImageDecodeError("Empty image payload")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return _to_rgb(img)
    except _DECODE_ERRORS as e:
        raise ImageDecodeError(f"Could not decode image ({len(data)} bytes): {e}") from e


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convert to RGB, flattening any alpha channel onto white."""
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")

    if img.mode in ("RGBA", "LA"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, FLATTEN_BACKGROUND)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background

    if img.mode != "RGB":
        return img.convert("RGB")
    return img.copy()
