"""
Serialization Utilities

Provides to/from JSON utilities for build requests.

The dashboard form posts camelCase keys (`checkInDate`, `coverImageUrl`,
`primaryImage`); files written by hand usually use snake_case. Both are
normalized to snake_case before validation.
"""

from __future__ import annotations

import json
import re
from datetime import date
from pathlib import Path
from typing import Any, Optional

from ..models.hotels import BuildRequest, HotelEntry
from ..schemas.validator import ValidationError, validate_build_request

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake_key(key: str) -> str:
    """checkInDate -> check_in_date"""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Return a shallow copy with snake_case keys."""
    return {_snake_key(k): v for k, v in data.items()}


def normalize_request_payload(data: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a raw request payload to snake_case, including hotel entries.

    Hotels without an `images` list fall back to a single `image` or
    `primary_image` value, as older dashboard payloads sent one image.
    """
    if not isinstance(data, dict):
        raise ValidationError("Build request must be an object")

    payload = _normalize_keys(data)
    hotels = payload.get("hotels")
    if isinstance(hotels, list):
        normalized = []
        for hotel in hotels:
            if not isinstance(hotel, dict):
                normalized.append(hotel)
                continue
            entry = _normalize_keys(hotel)
            if not entry.get("images"):
                single = entry.get("image") or entry.get("primary_image")
                entry["images"] = [single] if single else []
            normalized.append(entry)
        payload["hotels"] = normalized
    return payload


# ─────────────────────────────────────────────────────────────────────────────
# Build Request Serialization
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_build_request(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> BuildRequest:
    """
    Deserialize a BuildRequest from a dictionary.

    Args:
        data: Dictionary from JSON (camelCase or snake_case keys)
        validate: Whether to validate the payload first
        strict: Also validate against the JSON schema (unknown keys rejected)

    Returns:
        BuildRequest instance

    Raises:
        ValidationError: If the payload is invalid
    """
    payload = normalize_request_payload(data)
    if validate:
        validate_build_request(payload, strict=strict)

    hotels = tuple(_deserialize_hotel(h) for h in payload.get("hotels") or [])

    return BuildRequest(
        hotels=hotels,
        executive_name=_text_or_none(payload.get("executive_name")),
        client_name=_text_or_none(payload.get("client_name")),
        destination=_text_or_none(payload.get("destination")),
        check_in_date=_parse_date(payload.get("check_in_date")),
        check_out_date=_parse_date(payload.get("check_out_date")),
        cover_image_url=_text_or_none(payload.get("cover_image_url")),
    )


def serialize_build_request(request: BuildRequest) -> dict[str, Any]:
    """
    Serialize a BuildRequest to a snake_case dictionary.

    The output round-trips through `deserialize_build_request`.
    """
    return {
        "hotels": [
            {
                "name": hotel.name,
                "link": hotel.link,
                "price": hotel.price,
                "notes": hotel.notes,
                "images": list(hotel.images),
            }
            for hotel in request.hotels
        ],
        "executive_name": request.executive_name,
        "client_name": request.client_name,
        "destination": request.destination,
        "check_in_date": request.check_in_date.isoformat() if request.check_in_date else None,
        "check_out_date": request.check_out_date.isoformat() if request.check_out_date else None,
        "cover_image_url": request.cover_image_url,
    }


def load_build_request_json(path: Path) -> BuildRequest:
    """
    Load and strictly validate a build request from a JSON file.

    Raises:
        ValidationError: If the file is not valid JSON or the payload is invalid
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    return deserialize_build_request(data, strict=True)


def _deserialize_hotel(data: dict[str, Any]) -> HotelEntry:
    """Build a HotelEntry from a normalized hotel payload."""
    images = tuple(
        url.strip() for url in (data.get("images") or []) if isinstance(url, str) and url.strip()
    )
    return HotelEntry(
        link=str(data.get("link", "")).strip(),
        name=_text_or_none(data.get("name")),
        price=_text_or_none(data.get("price")),
        notes=_text_or_none(data.get("notes")),
        images=images,
    )


def _text_or_none(value: Any) -> Optional[str]:
    """Blank strings become None; numbers (e.g. price) become text."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (time part, if any, is ignored)."""
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
