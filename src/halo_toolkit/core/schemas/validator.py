"""
Request Validation Utilities

Validates raw build request payloads (as posted by the dashboard form
or loaded from a JSON file) before they are turned into models.

**WHY UP FRONT:**

A missing or malformed booking link is the only hard failure of a
build. Checking the whole payload before any image is fetched means a
bad request never produces network traffic or a partial document.

Structural checks always run. Strict mode also validates the payload
against `build_request.schema.json`, which rejects unknown keys; it is
used for hand-written request files, where a misspelt key would
otherwise be ignored.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import jsonschema

# URL schemes accepted for booking links
ALLOWED_LINK_SCHEMES = ("http", "https")

_OPTIONAL_TEXT_FIELDS = (
    "executive_name",
    "client_name",
    "destination",
    "cover_image_url",
)
_DATE_FIELDS = ("check_in_date", "check_out_date")
_HOTEL_TEXT_FIELDS = ("name", "price", "notes")

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(ValueError):
    """Raised when a build request is invalid."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or [message]


def is_absolute_url(value: str) -> bool:
    """
    Check that a string parses as an absolute http(s) URL.

    Examples:
        >>> is_absolute_url("https://booking.test/hotel/1")
        True
        >>> is_absolute_url("booking.test/hotel/1")
        False
    """
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_LINK_SCHEMES and bool(parsed.netloc)


def validate_build_request(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a normalized (snake_case) build request payload.

    Args:
        data: Request dictionary
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid. `path` points at the first
            offending field, `errors` lists every problem found.
    """
    if not isinstance(data, dict):
        raise ValidationError("Build request must be an object")

    errors: list[tuple[str, str]] = []

    hotels = data.get("hotels")
    if not isinstance(hotels, list) or not hotels:
        errors.append(("hotels", "No hotels to export"))
    else:
        for i, hotel in enumerate(hotels):
            errors.extend(_validate_hotel(hotel, f"hotels[{i}]"))

    for name in _OPTIONAL_TEXT_FIELDS:
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            errors.append((name, f"{name} must be a string"))

    for name in _DATE_FIELDS:
        value = data.get(name)
        if value in (None, ""):
            continue
        if not _is_iso_date(value):
            errors.append((name, f"Invalid {name}: {value!r} (expected YYYY-MM-DD)"))

    if strict and not errors:
        errors.extend(_schema_errors(data, "build_request"))

    if errors:
        path, message = errors[0]
        raise ValidationError(
            message if len(errors) == 1 else f"{message} (+{len(errors) - 1} more)",
            path=path,
            errors=[f"{p}: {m}" for p, m in errors],
        )


def _validate_hotel(data: Any, path: str) -> list[tuple[str, str]]:
    """Validate one hotel entry, returning (path, message) problems."""
    if not isinstance(data, dict):
        return [(path, "Hotel entry must be an object")]

    errors: list[tuple[str, str]] = []

    link = data.get("link")
    if not isinstance(link, str) or not link.strip():
        errors.append((f"{path}.link", "Hotel link is required"))
    elif not is_absolute_url(link.strip()):
        errors.append((f"{path}.link", f"Hotel link must be a valid absolute URL: {link!r}"))

    for name in _HOTEL_TEXT_FIELDS:
        value = data.get(name)
        if value is not None and not isinstance(value, (str, int, float)):
            errors.append((f"{path}.{name}", f"{name} must be text"))

    images = data.get("images", [])
    if images is None:
        images = []
    if not isinstance(images, list):
        errors.append((f"{path}.images", "images must be a list"))
    else:
        for j, url in enumerate(images):
            if not isinstance(url, str):
                errors.append((f"{path}.images[{j}]", "image URL must be a string"))

    return errors


def _schema_errors(data: dict[str, Any], schema_name: str) -> list[tuple[str, str]]:
    """Validate against a named schema, returning (path, message) problems."""
    validator = jsonschema.Draft202012Validator(_load_schema(schema_name))
    problems = sorted(validator.iter_errors(data), key=lambda e: e.json_path)
    return [
        (_format_path(e.absolute_path), f"Schema validation failed: {e.message}")
        for e in problems
    ]


def _format_path(parts) -> str:
    """deque(['hotels', 0, 'link']) -> 'hotels[0].link'"""
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _is_iso_date(value: Any) -> bool:
    """Accept YYYY-MM-DD, optionally followed by a time part."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value[:10])
    except ValueError:
        return False
    return True
