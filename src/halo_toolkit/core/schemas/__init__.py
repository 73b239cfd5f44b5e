"""
Schemas Package

Validation for raw build request payloads.
"""

from .validator import ValidationError, is_absolute_url, validate_build_request

__all__ = [
    "ValidationError",
    "is_absolute_url",
    "validate_build_request",
]
