"""Exceptions raised by the hotel PDF build pipeline."""

from __future__ import annotations

# Single message shown to users for any failed build
BUILD_FAILED_MESSAGE = "Failed to generate PDF. Please try again."


class BuildError(Exception):
    """Error during build pipeline."""

    def __init__(self, message: str = BUILD_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message
