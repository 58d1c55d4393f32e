"""Unit tests for image payload resolution.

Tests cover:
- Format and size validation (JPEG/PNG/WebP only)
- Pillow compression for large images
- load_image() for bytes, paths, URLs, data URLs and plain text references
"""

import base64
from io import BytesIO
from unittest.mock import AsyncMock, patch

import filetype
import pytest
from PIL import Image

from snap_chef.utils.images import (
    ImagePayload,
    compress_image,
    load_image,
    validate_image_format,
    validate_image_size,
)


def png_bytes(size=(8, 8), mode="RGB") -> bytes:
    output = BytesIO()
    Image.new(mode, size, color=(200, 50, 50) if mode == "RGB" else (200, 50, 50, 128)).save(output, format="PNG")
    return output.getvalue()


class TestValidateImage:
    """Test format and size validation."""

    def test_valid_jpeg(self):
        assert validate_image_format(b"\xff\xd8\xff\xe0\x00\x10JFIF") is True

    def test_valid_png(self):
        assert validate_image_format(png_bytes()) is True

    def test_gif_rejected(self):
        assert validate_image_format(b"GIF89a\x01\x00\x01\x00") is False

    def test_garbage_rejected(self):
        assert validate_image_format(b"definitely not an image") is False

    def test_size_limit(self):
        assert validate_image_size(b"x" * 1024, max_size_mb=1) is True
        assert validate_image_size(b"x" * (2 * 1024 * 1024), max_size_mb=1) is False


class TestCompressImage:
    """Test Pillow re-encoding."""

    def test_small_image_unchanged(self):
        data = png_bytes()

        assert compress_image(data, threshold_kb=300) is data

    def test_large_image_resized_to_jpeg(self):
        """Test that images over the threshold become JPEG at most 1024px wide."""
        data = png_bytes(size=(2048, 1024), mode="RGBA")

        compressed = compress_image(data, threshold_kb=0)

        assert filetype.guess(compressed).extension == "jpg"
        assert Image.open(BytesIO(compressed)).size == (1024, 512)

    def test_undecodable_image_returned_as_is(self):
        data = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

        assert compress_image(data, threshold_kb=0) == data


class TestLoadImage:
    """Test load_image() source resolution."""

    @pytest.mark.asyncio
    async def test_raw_bytes(self):
        payload = await load_image(png_bytes())

        assert payload.data is not None
        assert payload.mime_type == "image/png"
        assert payload.reference == ""

    @pytest.mark.asyncio
    async def test_file_path_sets_reference(self, tmp_path):
        image_file = tmp_path / "sushi_platter.png"
        image_file.write_bytes(png_bytes())

        from_path = await load_image(image_file)
        from_string = await load_image(str(image_file))

        assert from_path.reference == "sushi_platter.png"
        assert from_string.reference == "sushi_platter.png"
        assert from_string.data == from_path.data

    @pytest.mark.asyncio
    @patch("snap_chef.utils.images.fetch_image_bytes", new_callable=AsyncMock)
    async def test_url_keeps_reference_when_fetch_fails(self, mock_fetch):
        """Test that a failed download still yields the URL and file name."""
        mock_fetch.return_value = None

        payload = await load_image("https://cdn.example.com/photos/pasta.jpg?w=400")

        assert payload.data is None
        assert payload.url == "https://cdn.example.com/photos/pasta.jpg?w=400"
        assert payload.reference == "pasta.jpg"

    @pytest.mark.asyncio
    async def test_data_url(self):
        encoded = base64.b64encode(png_bytes()).decode("ascii")

        payload = await load_image(f"data:image/png;base64,{encoded}")

        assert payload.data is not None
        assert payload.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_plain_base64(self):
        payload = await load_image(base64.b64encode(png_bytes()).decode("ascii"))

        assert payload.data is not None

    @pytest.mark.asyncio
    async def test_text_reference(self):
        """Test that a short non-image string is kept as the reference hint."""
        payload = await load_image("grilled chicken")

        assert payload.data is None
        assert payload.reference == "grilled chicken"

    @pytest.mark.asyncio
    async def test_invalid_bytes_dropped(self):
        payload = await load_image(b"not an image at all")

        assert payload.data is None

    @pytest.mark.asyncio
    async def test_unsupported_type(self):
        payload = await load_image(12345)

        assert payload == ImagePayload(data=None)

    @pytest.mark.asyncio
    async def test_existing_payload_passthrough(self):
        original = ImagePayload(data=None, reference="salad.jpg")

        assert await load_image(original) is original

    def test_b64_property(self):
        assert ImagePayload(data=b"abc").b64 == "YWJj"
        assert ImagePayload(data=None).b64 is None
