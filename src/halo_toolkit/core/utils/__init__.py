"""
Utils Package

Serialization helpers for build requests.
"""

from .serialization import (
    deserialize_build_request,
    serialize_build_request,
    load_build_request_json,
    normalize_request_payload,
)

__all__ = [
    "deserialize_build_request",
    "serialize_build_request",
    "load_build_request_json",
    "normalize_request_payload",
]
