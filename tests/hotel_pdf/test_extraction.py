"""
Tests for hotel_pdf.extraction

Test Coverage:
- ExtractionClient.extract_images(): result mapping and error translation
- ExtractionClient.health_check()
- apply_extraction(): only empty image lists are filled
"""

import json

import httpx
import pytest

from halo_toolkit.core.models import HotelEntry
from halo_toolkit.hotel_pdf.extraction import (
    EXTRACTION_FAILED_MESSAGE,
    GATEWAY_TIMEOUT_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    REQUEST_TIMEOUT_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    ExtractionClient,
    ExtractionError,
    ExtractionResult,
    SessionExpiredError,
    apply_extraction,
)

LINK_A = "https://booking.test/hotels/a"
LINK_B = "https://booking.test/hotels/b"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestExtractImages:
    """Tests for ExtractionClient.extract_images."""

    @pytest.mark.asyncio
    async def test_posts_links_with_bearer_token_and_maps_results(self, builder_config):
        # Arrange
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={
                "success": True,
                "results": [
                    {"link": LINK_B, "success": True, "images": ["https://img.test/b1.jpg"]},
                    {"link": LINK_A, "success": False, "error": "Blocked by site"},
                ],
            })

        # Act
        async with _client(handler) as http:
            async with ExtractionClient(builder_config, client=http) as client:
                results = await client.extract_images([LINK_A, LINK_B])

        # Assert
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "http://backend.test/api/hotel-pdf/extract-images"
        assert seen[0].headers["Authorization"] == "Bearer test-token"
        assert json.loads(seen[0].content) == {"links": [LINK_A, LINK_B]}
        assert results[LINK_B].images == ("https://img.test/b1.jpg",)
        assert results[LINK_A].success is False
        assert results[LINK_A].error == "Blocked by site"

    @pytest.mark.asyncio
    async def test_results_without_link_field_map_by_position(self, builder_config):
        def handler(request):
            return httpx.Response(200, json={
                "success": True,
                "results": [
                    {"success": True, "primaryImage": "https://img.test/a.jpg"},
                    {"success": True, "images": ["https://img.test/b.jpg"]},
                ],
            })

        async with _client(handler) as http:
            results = await ExtractionClient(builder_config, client=http).extract_images([LINK_A, LINK_B])

        assert results[LINK_A].candidates == ("https://img.test/a.jpg",)
        assert results[LINK_B].candidates == ("https://img.test/b.jpg",)

    @pytest.mark.asyncio
    async def test_when_links_empty_then_raises_value_error(self, builder_config):
        with pytest.raises(ValueError):
            await ExtractionClient(builder_config).extract_images(["", ""])

    @pytest.mark.asyncio
    async def test_when_401_then_session_expired(self, builder_config):
        async with _client(lambda request: httpx.Response(401)) as http:
            with pytest.raises(SessionExpiredError) as exc:
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])

        assert exc.value.message == SESSION_EXPIRED_MESSAGE
        assert exc.value.status_code == 401

    @pytest.mark.parametrize(
        "status, body, expected",
        [
            (504, None, GATEWAY_TIMEOUT_MESSAGE),
            (504, {"message": "Upstream took too long"}, "Upstream took too long"),
            (500, {"message": "Scraper crashed"}, "Scraper crashed"),
            (500, None, EXTRACTION_FAILED_MESSAGE),
        ],
    )
    @pytest.mark.asyncio
    async def test_when_error_status_then_server_message_or_fallback(
        self, builder_config, status, body, expected
    ):
        def handler(request):
            if body is None:
                return httpx.Response(status, text="<html>error</html>")
            return httpx.Response(status, json=body)

        async with _client(handler) as http:
            with pytest.raises(ExtractionError) as exc:
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])

        assert exc.value.message == expected
        assert exc.value.status_code == status

    @pytest.mark.asyncio
    async def test_when_service_reports_failure_then_raises(self, builder_config):
        def handler(request):
            return httpx.Response(200, json={"success": False, "message": "Quota exceeded"})

        async with _client(handler) as http:
            with pytest.raises(ExtractionError, match="Quota exceeded"):
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])

    @pytest.mark.asyncio
    async def test_when_request_times_out_then_timeout_message(self, builder_config):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        async with _client(handler) as http:
            with pytest.raises(ExtractionError) as exc:
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])

        assert exc.value.message == REQUEST_TIMEOUT_MESSAGE

    @pytest.mark.asyncio
    async def test_when_server_unreachable_then_network_message(self, builder_config):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as http:
            with pytest.raises(ExtractionError) as exc:
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])

        assert exc.value.message == NETWORK_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_when_body_is_not_json_then_failed_message(self, builder_config):
        async with _client(lambda request: httpx.Response(200, text="ok")) as http:
            with pytest.raises(ExtractionError, match=EXTRACTION_FAILED_MESSAGE):
                await ExtractionClient(builder_config, client=http).extract_images([LINK_A])


class TestHealthCheck:
    """Tests for ExtractionClient.health_check."""

    @pytest.mark.asyncio
    async def test_returns_payload(self, builder_config):
        def handler(request):
            assert request.url.path == "/api/hotel-pdf/health"
            return httpx.Response(200, json={"status": "ok"})

        async with _client(handler) as http:
            assert await ExtractionClient(builder_config, client=http).health_check() == {"status": "ok"}


class TestApplyExtraction:
    """Tests for apply_extraction."""

    def test_only_hotels_without_images_are_filled(self):
        # Arrange
        hotels = [
            HotelEntry(link=LINK_A, images=("https://img.test/own.jpg",)),
            HotelEntry(link=LINK_B),
            HotelEntry(link="https://booking.test/hotels/c"),
        ]
        results = {
            LINK_A: ExtractionResult(LINK_A, True, ("https://img.test/new-a.jpg",)),
            LINK_B: ExtractionResult(LINK_B, True, primary_image="https://img.test/b.jpg"),
            "https://booking.test/hotels/c": ExtractionResult("https://booking.test/hotels/c", False),
        }

        # Act
        updated = apply_extraction(hotels, results)

        # Assert
        assert updated[0].images == ("https://img.test/own.jpg",)
        assert updated[1].images == ("https://img.test/b.jpg",)
        assert updated[2].images == ()
