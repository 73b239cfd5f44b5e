"""
Tests for hotel_pdf.images.decoder
"""

import io

import pytest
from PIL import Image

from halo_toolkit.hotel_pdf.images.decoder import ImageDecodeError, decode_image


class TestDecodeImage:
    """Tests for decode_image."""

    def test_decodes_png_to_rgb(self, png_factory):
        img = decode_image(png_factory(64, 32))
        assert img.mode == "RGB"
        assert img.size == (64, 32)

    def test_when_rgba_then_transparency_is_flattened_onto_white(self, png_factory):
        # Arrange
        data = png_factory(10, 10, color=(255, 0, 0, 0), mode="RGBA")

        # Act
        img = decode_image(data)

        # Assert
        assert img.mode == "RGB"
        assert img.getpixel((5, 5)) == (255, 255, 255)

    def test_when_grayscale_jpeg_then_converted_to_rgb(self):
        buf = io.BytesIO()
        Image.new("L", (8, 8), color=128).save(buf, format="JPEG")

        img = decode_image(buf.getvalue())

        assert img.mode == "RGB"

    @pytest.mark.parametrize("data", [b"", b"<html>Not an image</html>", b"\x89PNG\r\n\x1a\ntruncated"])
    def test_when_bytes_are_not_an_image_then_raises(self, data):
        with pytest.raises(ImageDecodeError):
            decode_image(data)

    def test_when_png_chunk_is_corrupt_then_raises_decode_error(self, broken_png_bytes):
        # Opening succeeds; the failure surfaces while loading pixel data
        with pytest.raises(ImageDecodeError) as exc:
            decode_image(broken_png_bytes)

        assert exc.value.__cause__ is not None
