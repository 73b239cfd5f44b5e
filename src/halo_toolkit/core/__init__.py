"""
Halo Toolkit Core Package

Shared data models and request handling for the hotel PDF builder.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Requests, entries and resolved assets are frozen dataclasses
   - Any change produces a new instance (e.g. filling extracted images)

2. **Validate Before Building**
   - Raw dashboard payloads are checked by `core.schemas.validator`
     before they become models, so a bad link never reaches the network

3. **Camel and Snake Case Input**
   - The dashboard posts camelCase keys; `core.utils.serialization`
     accepts both spellings
"""

from .models import AssetStatus, BuildRequest, HotelEntry, ImageAsset
from .schemas import ValidationError

__all__ = [
    "AssetStatus",
    "BuildRequest",
    "HotelEntry",
    "ImageAsset",
    "ValidationError",
]
