"""
Module: hotel_pdf.images.resolver

Purpose:
    Turn remote image URLs into ImageAssets. Each URL is fetched through
    the backend's same-origin image proxy first and directly as a
    fallback; if both fail the asset is marked FAILED instead of raising.

Key Classes:
    - AssetResolver: Sequential, memoizing URL -> ImageAsset resolver
    - AssetFetchError: Fetch returned no usable payload

Request Policy:
    URLs are resolved strictly one at a time (resolve_many awaits each
    URL before starting the next). This bounds the number of open
    requests against third-party booking sites to one, and every
    failure maps to exactly one URL and one attempt. Do not gather()
    these fetches.

Dependencies:
    - httpx: Async HTTP client
    - hotel_pdf.images.decoder: Byte decoding
    - core.models.assets: ImageAsset

Used By:
    - hotel_pdf.layout.composer: Cover and grid images
    - hotel_pdf.controller: Owns one resolver per build
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

import httpx

from halo_toolkit.core.models import ImageAsset

from ..config import BuilderConfig
from .decoder import ImageDecodeError, decode_image

logger = logging.getLogger(__name__)

STAGE_PROXY = "proxy"
STAGE_DIRECT = "direct"


class AssetFetchError(Exception):
    """Fetch completed but returned no usable payload."""
    pass


# Failures that mean "this attempt did not produce an image"
_ATTEMPT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, AssetFetchError, ImageDecodeError)


class AssetResolver:
    """
    Resolve image URLs to ImageAssets with proxy-then-direct fallback.

    One resolver belongs to one document build. Results are memoized by
    URL, so a URL used for both the cover and a hotel grid is fetched
    once, and a FAILED URL is never retried within the build.

    Attributes:
        config: Builder configuration (proxy endpoint, timeouts, token)

    Example:
        >>> async with AssetResolver(config) as resolver:
        ...     asset = await resolver.resolve("https://cdn.test/room.jpg")
        >>> asset.status
        <AssetStatus.LOADED: 'loaded'>
    """

    def __init__(
        self,
        config: BuilderConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            config: Builder configuration
            client: Optional pre-built client (tests inject a MockTransport
                client here). A client passed in is not closed by aclose().
        """
        self.config = config
        self._client = client
        self._owns_client = client is None
        self._cache: Dict[str, ImageAsset] = {}

    async def __aenter__(self) -> "AssetResolver":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args) -> None:
        """Async context manager exit - close the HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ─────────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────────

    async def resolve(self, url: str) -> ImageAsset:
        """
        Resolve one URL. Always settles; never raises for fetch/decode errors.

        Args:
            url: Remote image URL

        Returns:
            LOADED asset with decoded image, or FAILED asset
        """
        key = (url or "").strip()
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Asset cache hit ({cached.status.value}): {key}")
            return cached

        if not key:
            asset = ImageAsset.failed(key, "Image URL is required")
            logger.warning("Skipping empty image URL")
        else:
            asset = await self._resolve_uncached(key)

        self._cache[key] = asset
        return asset

    async def resolve_many(self, urls: Iterable[str]) -> List[ImageAsset]:
        """
        Resolve URLs one after another, preserving order.

        Args:
            urls: Image URLs in display order

        Returns:
            One asset per URL, same order
        """
        assets: List[ImageAsset] = []
        for url in urls:
            assets.append(await self.resolve(url))
        return assets

    @property
    def failures(self) -> List[ImageAsset]:
        """Every FAILED asset resolved so far, in resolution order."""
        return [asset for asset in self._cache.values() if not asset.is_loaded]

    @property
    def resolved_count(self) -> int:
        """Number of distinct URLs resolved so far."""
        return len(self._cache)

    # ─────────────────────────────────────────────────────────────────────────
    # Attempts
    # ─────────────────────────────────────────────────────────────────────────

    async def _resolve_uncached(self, url: str) -> ImageAsset:
        """Run the proxy attempt, then the direct attempt if needed."""
        errors: List[str] = []
        attempts: tuple[tuple[str, Callable[[str], Awaitable[bytes]]], ...] = (
            (STAGE_PROXY, self._fetch_via_proxy),
            (STAGE_DIRECT, self._fetch_direct),
        )

        for stage, fetch in attempts:
            try:
                data = await fetch(url)
                image = decode_image(data)
            except _ATTEMPT_ERRORS as e:
                message = _describe(e)
                errors.append(f"{stage}: {message}")
                logger.warning(f"Image fetch failed via {stage} for {url}: {message}")
                continue

            logger.debug(f"Loaded image via {stage} ({image.width}x{image.height}): {url}")
            return ImageAsset.loaded(url, image, data, stage)

        return ImageAsset.failed(url, "; ".join(errors))

    async def _fetch_via_proxy(self, url: str) -> bytes:
        """Fetch through the backend image proxy with the bearer token."""
        client = self._get_client()
        response = await client.get(
            self.config.proxy_endpoint,
            params={"url": url},
            headers=self.config.auth_headers(),
            timeout=self.config.proxy_timeout,
        )
        return _payload(response)

    async def _fetch_direct(self, url: str) -> bytes:
        """Fetch the image URL itself (no backend credentials)."""
        client = self._get_client()
        response = await client.get(url, timeout=self.config.direct_timeout)
        return _payload(response)

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent, "Accept": "image/*"},
            )
        return self._client


def _payload(response: httpx.Response) -> bytes:
    """Return body bytes of a successful response."""
    response.raise_for_status()
    content = response.content
    if not content:
        raise AssetFetchError(f"Empty response body ({response.status_code})")
    return content


def _describe(error: Exception) -> str:
    """Short, log-friendly description of an attempt failure."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    if isinstance(error, httpx.TimeoutException):
        return "timed out"
    return str(error) or type(error).__name__
