"""
Module: hotel_pdf.config

Purpose:
    Configuration dataclass for the hotel PDF builder. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building documents

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - hotel_pdf.controller: Main build controller
    - hotel_pdf.images.resolver: Proxy URL, timeouts, auth
    - hotel_pdf.extraction: Extraction service client
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_API_BASE_URL = "http://localhost:7007/api"
DEFAULT_BRAND_NAME = "APEX HAVEN"
DEFAULT_WATERMARK_TEXT = "APEX HAVEN - Internal Use Only"


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building hotel recommendation PDFs (immutable).

    Attributes:
        api_base_url: Backend base URL hosting /hotel-pdf/* endpoints
        api_token: Bearer token sent to the backend (proxy and extraction)
        output_dir: Directory the finished PDF is written to
        proxy_timeout: Seconds allowed for the same-origin proxy fetch
        direct_timeout: Seconds allowed for the direct fallback fetch
        extraction_timeout: Seconds allowed for image extraction
        brand_name: Mark drawn in the top-right corner of each page
        watermark_text: Text stamped across every page
        watermark_opacity: Fill alpha for the watermark (0-1]
        link_display_chars: Visible characters of the link line before "..."
        user_agent: User-Agent header for outbound requests

    Example:
        >>> config = BuilderConfig(output_dir=Path("output"))
        >>> config.proxy_endpoint
        'http://localhost:7007/api/hotel-pdf/proxy-image'
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: Optional[str] = None
    output_dir: Path = Path("output")

    # Network
    proxy_timeout: float = 30.0
    direct_timeout: float = 30.0
    extraction_timeout: float = 300.0
    user_agent: str = "halo-toolkit/hotel-pdf"

    # Branding
    brand_name: str = DEFAULT_BRAND_NAME
    watermark_text: str = DEFAULT_WATERMARK_TEXT
    watermark_opacity: float = 0.2

    # Text
    link_display_chars: int = 70

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.api_base_url.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must be http(s): {self.api_base_url!r}")
        for name in ("proxy_timeout", "direct_timeout", "extraction_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive: {getattr(self, name)}")
        if not 0 < self.watermark_opacity <= 1:
            raise ValueError(f"watermark_opacity must be in (0, 1]: {self.watermark_opacity}")
        if self.link_display_chars <= 0:
            raise ValueError(f"link_display_chars must be positive: {self.link_display_chars}")
        if not isinstance(self.output_dir, Path):
            object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))

    @property
    def proxy_endpoint(self) -> str:
        """Same-origin image proxy endpoint."""
        return f"{self.api_base_url}/hotel-pdf/proxy-image"

    @property
    def extraction_endpoint(self) -> str:
        """Image extraction endpoint."""
        return f"{self.api_base_url}/hotel-pdf/extract-images"

    @property
    def health_endpoint(self) -> str:
        """Hotel PDF service health endpoint."""
        return f"{self.api_base_url}/hotel-pdf/health"

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for backend calls (empty without a token)."""
        return {"Authorization": f"Bearer {self.api_token}"} if self.api_token else {}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "BuilderConfig":
        """
        Build a config from HALO_* environment variables.

        Reads HALO_API_BASE_URL, HALO_API_TOKEN and HALO_OUTPUT_DIR.
        Keyword overrides that are not None win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if env.get("HALO_API_BASE_URL"):
            values["api_base_url"] = env["HALO_API_BASE_URL"]
        if env.get("HALO_API_TOKEN"):
            values["api_token"] = env["HALO_API_TOKEN"]
        if env.get("HALO_OUTPUT_DIR"):
            values["output_dir"] = Path(env["HALO_OUTPUT_DIR"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
