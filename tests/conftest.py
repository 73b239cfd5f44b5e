import io
import sys
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Optional

import httpx
import pytest
from PIL import Image

# Add src to sys.path so we can import halo_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from halo_toolkit.hotel_pdf.config import BuilderConfig  # noqa: E402

BUILD_DATE = date(2026, 3, 14)
PROXY_PATH = "/api/hotel-pdf/proxy-image"


def make_png(width: int = 200, height: int = 100, color: str = "steelblue", mode: str = "RGB") -> bytes:
    """Encode a solid-colour PNG."""
    img = Image.new(mode, (width, height), color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def make_broken_png() -> bytes:
    """
    PNG that opens but fails while loading pixel data.

    The IDAT length is cut to two bytes, so the decoder reads the next
    chunk header from inside the compressed data and finds an invalid
    chunk type.
    """
    pixels = bytes((i * 7) % 256 for i in range(40 * 30 * 3))
    buf = io.BytesIO()
    Image.frombytes("RGB", (40, 30), pixels).save(buf, format="PNG")
    data = bytearray(buf.getvalue())
    idat = data.index(b"IDAT")
    start = idat + 4
    data[idat - 4:idat] = (2).to_bytes(4, "big")
    data[start + 2:start + 14] = b"\x00" * 4 + (16).to_bytes(4, "big") + b"\x7fg\xad\xe0"
    return bytes(data)


class FakeImageHost:
    """
    httpx.MockTransport handler serving images by URL.

    `proxy` maps original image URLs to bytes served by the backend proxy;
    `direct` maps URLs to bytes served by the image host itself. Anything
    else is a 404. Every request is recorded.
    """

    def __init__(
        self,
        proxy: Optional[Dict[str, bytes]] = None,
        direct: Optional[Dict[str, bytes]] = None,
    ) -> None:
        self.proxy = dict(proxy or {})
        self.direct = dict(direct or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == PROXY_PATH:
            target = request.url.params.get("url")
            if target in self.proxy:
                return httpx.Response(200, content=self.proxy[target])
            return httpx.Response(502, json={"message": "Upstream image fetch failed"})
        url = str(request.url)
        if url in self.direct:
            return httpx.Response(200, content=self.direct[url])
        return httpx.Response(404)

    @property
    def proxy_calls(self) -> list[str]:
        return [r.url.params.get("url") for r in self.requests if r.url.path == PROXY_PATH]

    @property
    def direct_calls(self) -> list[str]:
        return [str(r.url) for r in self.requests if r.url.path != PROXY_PATH]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


# Common test fixtures
@pytest.fixture
def png_bytes() -> bytes:
    """A 200x100 PNG."""
    return make_png()


@pytest.fixture
def broken_png_bytes() -> bytes:
    """A PNG whose pixel data is corrupt."""
    return make_broken_png()


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a simple test image."""
    return Image.new("RGB", (200, 100), color="white")


@pytest.fixture
def builder_config(tmp_path: Path) -> BuilderConfig:
    """Config pointing at a fake backend and a temp output directory."""
    return BuilderConfig(
        api_base_url="http://backend.test/api",
        api_token="test-token",
        output_dir=tmp_path / "out",
    )


@pytest.fixture
def image_host_factory() -> Callable[..., FakeImageHost]:
    """Build a FakeImageHost(proxy=..., direct=...)."""
    return FakeImageHost


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    """make_png(width, height, color, mode) as a fixture."""
    return make_png
