"""
Module: hotel_pdf.images

Purpose:
    Image access for the hotel PDF builder. Resolves remote image URLs
    into decoded assets with graceful degradation.

Key Classes:
    - AssetResolver: Proxy-then-direct resolver, sequential and memoized

Key Functions:
    - decode_image(): Decode bytes to an RGB Pillow image

Dependencies:
    - httpx: HTTP fetching
    - PIL: Image decoding

Used By:
    - hotel_pdf.layout.composer: Page composition
    - hotel_pdf.controller: Build orchestration
"""

from .decoder import ImageDecodeError, decode_image
from .resolver import AssetFetchError, AssetResolver, STAGE_DIRECT, STAGE_PROXY

__all__ = [
    "AssetResolver",
    "AssetFetchError",
    "ImageDecodeError",
    "decode_image",
    "STAGE_DIRECT",
    "STAGE_PROXY",
]
