"""
Tests for hotel_pdf.images.resolver

Test Coverage:
- proxy first, direct fallback
- failures absorbed as FAILED assets
- per-build memoization and sequential resolution
"""

import httpx
import pytest

from halo_toolkit.core.models import AssetStatus
from halo_toolkit.hotel_pdf.images import STAGE_DIRECT, STAGE_PROXY, AssetResolver

IMG_A = "https://img.test/a.jpg"
IMG_B = "https://img.test/b.jpg"


class TestAssetResolver:
    """Tests for AssetResolver."""

    @pytest.mark.asyncio
    async def test_when_proxy_serves_image_then_direct_is_not_tried(
        self, builder_config, image_host_factory, png_bytes
    ):
        # Arrange
        host = image_host_factory(proxy={IMG_A: png_bytes})

        # Act
        async with host.client() as client:
            resolver = AssetResolver(builder_config, client=client)
            asset = await resolver.resolve(IMG_A)

        # Assert
        assert asset.status is AssetStatus.LOADED
        assert asset.stage == STAGE_PROXY
        assert asset.native_size == (200, 100)
        assert host.proxy_calls == [IMG_A]
        assert host.direct_calls == []

    @pytest.mark.asyncio
    async def test_proxy_request_carries_bearer_token(self, builder_config, image_host_factory, png_bytes):
        host = image_host_factory(proxy={IMG_A: png_bytes})

        async with host.client() as client:
            await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert host.requests[0].headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_when_proxy_fails_then_direct_fetch_is_used(
        self, builder_config, image_host_factory, png_bytes
    ):
        host = image_host_factory(direct={IMG_A: png_bytes})

        async with host.client() as client:
            asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert asset.is_loaded
        assert asset.stage == STAGE_DIRECT
        assert host.proxy_calls == [IMG_A]
        assert host.direct_calls == [IMG_A]

    @pytest.mark.asyncio
    async def test_direct_fetch_has_no_backend_token(self, builder_config, image_host_factory, png_bytes):
        host = image_host_factory(direct={IMG_A: png_bytes})

        async with host.client() as client:
            await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert "Authorization" not in host.requests[1].headers

    @pytest.mark.asyncio
    async def test_when_both_attempts_fail_then_asset_is_failed_not_raised(
        self, builder_config, image_host_factory, caplog
    ):
        host = image_host_factory()

        async with host.client() as client:
            with caplog.at_level("WARNING"):
                asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert asset.status is AssetStatus.FAILED
        assert "proxy: HTTP 502" in asset.error
        assert "direct: HTTP 404" in asset.error
        assert IMG_A in caplog.text
        assert "via proxy" in caplog.text and "via direct" in caplog.text

    @pytest.mark.asyncio
    async def test_when_payload_is_not_an_image_then_falls_back_then_fails(
        self, builder_config, image_host_factory
    ):
        host = image_host_factory(proxy={IMG_A: b"<html>blocked</html>"}, direct={IMG_A: b""})

        async with host.client() as client:
            asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert asset.status is AssetStatus.FAILED
        assert len(host.requests) == 2

    @pytest.mark.asyncio
    async def test_when_image_data_is_corrupt_then_asset_is_failed_not_raised(
        self, builder_config, image_host_factory, broken_png_bytes
    ):
        # Arrange
        host = image_host_factory(proxy={IMG_A: broken_png_bytes}, direct={IMG_A: broken_png_bytes})

        # Act
        async with host.client() as client:
            asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        # Assert
        assert asset.status is AssetStatus.FAILED
        assert "proxy: Could not decode image" in asset.error
        assert "direct: Could not decode image" in asset.error

    @pytest.mark.asyncio
    async def test_when_corrupt_proxy_image_then_direct_copy_is_used(
        self, builder_config, image_host_factory, broken_png_bytes, png_bytes
    ):
        host = image_host_factory(proxy={IMG_A: broken_png_bytes}, direct={IMG_A: png_bytes})

        async with host.client() as client:
            asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert asset.status is AssetStatus.LOADED
        assert asset.stage == STAGE_DIRECT

    @pytest.mark.asyncio
    async def test_when_transport_errors_then_asset_is_failed(self, builder_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            asset = await AssetResolver(builder_config, client=client).resolve(IMG_A)

        assert asset.status is AssetStatus.FAILED

    @pytest.mark.asyncio
    async def test_when_url_is_empty_then_failed_without_network(self, builder_config, image_host_factory):
        host = image_host_factory()

        async with host.client() as client:
            asset = await AssetResolver(builder_config, client=client).resolve("  ")

        assert asset.status is AssetStatus.FAILED
        assert host.requests == []

    @pytest.mark.asyncio
    async def test_same_url_is_fetched_once_per_resolver(self, builder_config, image_host_factory):
        # Arrange
        host = image_host_factory()

        # Act
        async with host.client() as client:
            resolver = AssetResolver(builder_config, client=client)
            first = await resolver.resolve(IMG_A)
            second = await resolver.resolve(IMG_A)

        # Assert
        assert first is second
        assert len(host.requests) == 2  # proxy + direct, once
        assert resolver.resolved_count == 1
        assert resolver.failures == [first]

    @pytest.mark.asyncio
    async def test_resolve_many_keeps_order_and_runs_one_at_a_time(
        self, builder_config, png_bytes
    ):
        # Arrange
        in_flight = 0
        max_in_flight = 0

        async def handler(request):
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            in_flight -= 1
            if request.url.params.get("url") == IMG_B:
                return httpx.Response(200, content=png_bytes)
            return httpx.Response(404)

        # Act
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assets = await AssetResolver(builder_config, client=client).resolve_many([IMG_A, IMG_B])

        # Assert
        assert [a.source_url for a in assets] == [IMG_A, IMG_B]
        assert [a.is_loaded for a in assets] == [False, True]
        assert max_in_flight == 1

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self, builder_config, image_host_factory):
        host = image_host_factory()
        client = host.client()

        async with AssetResolver(builder_config, client=client):
            pass

        assert not client.is_closed
        await client.aclose()
