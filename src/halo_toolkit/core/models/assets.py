"""
Module: assets

Purpose:
    Provides the ImageAsset dataclass - one remote image after the
    resolver has tried to fetch and decode it.

Key Classes:
    - AssetStatus: PENDING / LOADED / FAILED
    - ImageAsset: Resolution outcome with decoded raster and natural size

Dependencies:
    - dataclasses (std)
    - enum (std)
    - PIL.Image (TYPE_CHECKING only)

Used By:
    - hotel_pdf.images.resolver
    - hotel_pdf.layout.composer
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PIL import Image


class AssetStatus(str, Enum):
    """Resolution state of an image asset. LOADED and FAILED are terminal."""

    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageAsset:
    """
    Resolved or failed representation of one remote image.

    Attributes:
        source_url: URL the asset was requested with
        status: Resolution state
        raw_data: Bytes as downloaded (LOADED only)
        image: Decoded RGB Pillow image (LOADED only)
        native_width: Natural width in pixels (LOADED only)
        native_height: Natural height in pixels (LOADED only)
        stage: Attempt that produced the bytes ("proxy" or "direct")
        error: Last failure message (FAILED only)

    Example:
        >>> asset = ImageAsset.failed("https://x.test/a.jpg", "timeout")
        >>> asset.is_loaded
        False
    """

    source_url: str
    status: AssetStatus = AssetStatus.PENDING
    raw_data: Optional[bytes] = None
    image: Optional["Image.Image"] = None
    native_width: Optional[int] = None
    native_height: Optional[int] = None
    stage: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate asset on construction."""
        if self.status is AssetStatus.LOADED:
            if self.image is None:
                raise ValueError(f"Loaded asset needs a decoded image: {self.source_url}")
            if not self.native_width or not self.native_height:
                raise ValueError(f"Loaded asset needs natural dimensions: {self.source_url}")

    @classmethod
    def loaded(
        cls,
        source_url: str,
        image: "Image.Image",
        raw_data: bytes,
        stage: str,
    ) -> "ImageAsset":
        """Build a LOADED asset from a decoded image."""
        return cls(
            source_url=source_url,
            status=AssetStatus.LOADED,
            raw_data=raw_data,
            image=image,
            native_width=image.width,
            native_height=image.height,
            stage=stage,
        )

    @classmethod
    def failed(cls, source_url: str, error: str) -> "ImageAsset":
        """Build a FAILED asset."""
        return cls(source_url=source_url, status=AssetStatus.FAILED, error=error)

    @property
    def is_loaded(self) -> bool:
        """True when the asset can be drawn."""
        return self.status is AssetStatus.LOADED

    @property
    def is_terminal(self) -> bool:
        """True once resolution has settled."""
        return self.status is not AssetStatus.PENDING

    @property
    def native_size(self) -> tuple[int, int]:
        """(width, height) in pixels. Only valid for LOADED assets."""
        if not self.is_loaded:
            raise ValueError(f"Asset not loaded: {self.source_url}")
        return (self.native_width, self.native_height)
