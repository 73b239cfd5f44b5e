"""
Module: hotel_pdf.extraction

Purpose:
    Client for the backend image-extraction service. Given booking
    links, the service scrapes candidate hotel images; results are merged
    into HotelEntry objects before a build.

Key Classes:
    - ExtractionClient: Async client (extract_images, health_check)
    - ExtractionResult: Outcome for one link

Key Functions:
    - apply_extraction(): Fill empty image lists from results

Dependencies:
    - httpx: Async HTTP
    - hotel_pdf.config: Endpoints, token, timeout

Used By:
    - run_hotel_pdf.py: --extract option
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import httpx

from halo_toolkit.core.models import HotelEntry

from .config import BuilderConfig

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
GATEWAY_TIMEOUT_MESSAGE = "Image extraction timed out. Please try again with fewer links."
REQUEST_TIMEOUT_MESSAGE = (
    "Request timed out. The image extraction is taking too long. "
    "Please try again with fewer links."
)
NETWORK_ERROR_MESSAGE = "Network error: Could not reach server"
EXTRACTION_FAILED_MESSAGE = "Failed to extract images"


class ExtractionError(Exception):
    """Image extraction request failed; the message is user-facing."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(ExtractionError):
    """Backend rejected the bearer token (HTTP 401)."""

    def __init__(self) -> None:
        super().__init__(SESSION_EXPIRED_MESSAGE, status_code=401)


@dataclass(frozen=True)
class ExtractionResult:
    """
    Extraction outcome for one booking link.

    Attributes:
        link: Booking link the result belongs to
        success: Whether the service found images
        images: Image URLs in service order
        primary_image: Preferred image, if the service named one
        error: Service error text for unsuccessful links
    """

    link: str
    success: bool
    images: Tuple[str, ...] = field(default_factory=tuple)
    primary_image: Optional[str] = None
    error: Optional[str] = None

    @property
    def candidates(self) -> Tuple[str, ...]:
        """Images to use, falling back to the primary image alone."""
        if self.images:
            return self.images
        return (self.primary_image,) if self.primary_image else ()

    @classmethod
    def from_payload(cls, link: str, data: Mapping[str, Any]) -> "ExtractionResult":
        """Build from one entry of the service's `results` array."""
        images = tuple(str(url) for url in (data.get("images") or []) if url)
        return cls(
            link=link,
            success=bool(data.get("success")),
            images=images,
            primary_image=data.get("primaryImage") or data.get("primary_image"),
            error=data.get("error") or data.get("message"),
        )


class ExtractionClient:
    """
    Async client for /hotel-pdf/extract-images and /hotel-pdf/health.

    Example:
        >>> async with ExtractionClient(config) as client:
        ...     results = await client.extract_images(["https://booking.test/h1"])
        >>> results["https://booking.test/h1"].success
        True
    """

    def __init__(
        self,
        config: BuilderConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ExtractionClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def extract_images(self, links: Sequence[str]) -> Dict[str, ExtractionResult]:
        """
        Ask the service to extract images for booking links.

        Args:
            links: Booking links (non-empty)

        Returns:
            Mapping of link to its ExtractionResult

        Raises:
            ValueError: If `links` is empty
            SessionExpiredError: On HTTP 401
            ExtractionError: On any other failure
        """
        links = [link for link in links if link]
        if not links:
            raise ValueError("Links array is required and must not be empty")

        logger.info(f"Requesting image extraction for {len(links)} links")
        data = await self._request(
            "POST",
            self.config.extraction_endpoint,
            json={"links": links},
            timeout=self.config.extraction_timeout,
        )
        if not data.get("success"):
            raise ExtractionError(data.get("message") or EXTRACTION_FAILED_MESSAGE)

        results = _map_results(links, data.get("results") or [])
        found = sum(1 for r in results.values() if r.success and r.candidates)
        logger.info(f"Extraction finished: {found}/{len(links)} links with images")
        return results

    async def health_check(self) -> Dict[str, Any]:
        """Return the service health payload."""
        return await self._request("GET", self.config.health_endpoint, timeout=self.config.proxy_timeout)

    async def _request(self, method: str, url: str, *, timeout: float, **kwargs: Any) -> Dict[str, Any]:
        client = self._get_client()
        try:
            response = await client.request(
                method, url, headers=self.config.auth_headers(), timeout=timeout, **kwargs
            )
        except httpx.TimeoutException as e:
            logger.error(f"Extraction service timed out: {url}")
            raise ExtractionError(REQUEST_TIMEOUT_MESSAGE) from e
        except httpx.TransportError as e:
            logger.error(f"Extraction service unreachable: {url} ({e})")
            raise ExtractionError(NETWORK_ERROR_MESSAGE) from e

        if response.status_code == 401:
            logger.warning("Extraction service rejected the session token")
            raise SessionExpiredError()
        if response.is_error:
            message = _server_message(response)
            fallback = GATEWAY_TIMEOUT_MESSAGE if response.status_code == 504 else EXTRACTION_FAILED_MESSAGE
            logger.error(f"Extraction service returned {response.status_code}: {message or fallback}")
            raise ExtractionError(message or fallback, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise ExtractionError(EXTRACTION_FAILED_MESSAGE, status_code=response.status_code) from e
        if not isinstance(payload, dict):
            raise ExtractionError(EXTRACTION_FAILED_MESSAGE, status_code=response.status_code)
        return payload

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers={"User-Agent": self.config.user_agent})
        return self._client


def apply_extraction(
    hotels: Iterable[HotelEntry],
    results: Mapping[str, ExtractionResult],
) -> List[HotelEntry]:
    """
    Fill empty image lists from extraction results.

    Entries that already have images, or whose result is missing or
    unsuccessful, are returned unchanged.

    Example:
        >>> updated = apply_extraction(request.hotels, results)
    """
    updated: List[HotelEntry] = []
    for hotel in hotels:
        result = results.get(hotel.link)
        if hotel.images or result is None or not result.success or not result.candidates:
            updated.append(hotel)
            continue
        updated.append(hotel.with_images(result.candidates))
    return updated


def _map_results(links: Sequence[str], raw: Sequence[Any]) -> Dict[str, ExtractionResult]:
    """Pair results with links: by their `link` field, else by position."""
    results: Dict[str, ExtractionResult] = {}
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            continue
        link = item.get("link") or item.get("url")
        if link not in links:
            if index >= len(links):
                continue
            link = links[index]
        results[link] = ExtractionResult.from_payload(link, item)
    return results


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
