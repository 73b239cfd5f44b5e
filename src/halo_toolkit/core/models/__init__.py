"""
Core Models Package

Immutable, validated data models shared by the hotel PDF builder.

| Model | Role |
|-------|------|
| `HotelEntry` | One hotel: link, optional name/price/notes, candidate images |
| `BuildRequest` | Hotels plus cover/filename metadata for one document |
| `ImageAsset` | A remote image after resolution (loaded or failed) |
"""

from .assets import AssetStatus, ImageAsset
from .hotels import BuildRequest, HotelEntry, MAX_GRID_IMAGES

__all__ = [
    "AssetStatus",
    "ImageAsset",
    "BuildRequest",
    "HotelEntry",
    "MAX_GRID_IMAGES",
]
