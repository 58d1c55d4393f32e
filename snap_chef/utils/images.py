"""Image payload resolution for food detection.

Turns whatever the caller passes (raw bytes, a file path, an http(s) URL, a
data URL or plain base64) into an ImagePayload. Loading never raises: if the
bytes can't be obtained the payload carries `data=None` and only providers
that can work from a URL are tried, then the mock lookup.

Core Functions:
- load_image(): resolve a source into an ImagePayload (async)
- fetch_image_bytes(): get bytes from URL or data URL (async)
- validate_image_format(): JPEG/PNG/WebP only, by magic bytes
- validate_image_size(): MAX_IMAGE_SIZE_MB limit
- compress_image(): Pillow JPEG re-encode for large uploads
"""

import base64
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import aiohttp
import filetype
from PIL import Image

from snap_chef.utils.errors import safe_execute_async, safe_execute_sync
from snap_chef.utils.logger import logger

SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "webp")
MAX_REFERENCE_LENGTH = 200


@dataclass(frozen=True)
class ImagePayload:
    """Resolved image.

    Attributes:
        data: Raw image bytes, or None if they could not be loaded.
        reference: Human-meaningful name (file name or URL), "" for inline data.
        url: Remote http(s) URL when the image came from one.
        mime_type: Detected MIME type, defaults to image/jpeg.
    """

    data: Optional[bytes]
    reference: str = ""
    url: Optional[str] = None
    mime_type: str = "image/jpeg"

    @property
    def b64(self) -> Optional[str]:
        if self.data is None:
            return None
        return base64.b64encode(self.data).decode("ascii")


def guess_mime_type(image_bytes: Optional[bytes]) -> str:
    kind = filetype.guess(image_bytes) if image_bytes else None
    return kind.mime if kind is not None else "image/jpeg"


def validate_image_format(image_bytes: bytes) -> bool:
    """Validate image format (JPEG, PNG or WebP) from magic bytes."""
    kind = filetype.guess(image_bytes) if image_bytes else None
    if kind is None or kind.extension not in SUPPORTED_EXTENSIONS:
        logger.warning(f"Invalid image format: {kind}. Only JPEG, PNG and WebP supported.")
        return False
    return True


def validate_image_size(image_bytes: bytes, max_size_mb: int) -> bool:
    """Validate raw byte length against the configured limit."""
    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > max_size_mb:
        logger.warning(f"Image size {size_mb:.2f}MB exceeds limit of {max_size_mb}MB")
        return False
    return True


def compress_image(image_bytes: bytes, threshold_kb: int, max_width: int = 1024) -> bytes:
    """Re-encode large images as JPEG (quality 85) for API transmission.

    Images below `threshold_kb` are returned unchanged; so is the original if
    Pillow fails to decode it.
    """
    size_kb = len(image_bytes) / 1024
    if size_kb < threshold_kb:
        logger.debug(f"Image size {size_kb:.1f}KB below compression threshold ({threshold_kb}KB)")
        return image_bytes

    def _compress():
        img = Image.open(BytesIO(image_bytes))

        # Convert RGBA/LA/P to RGB for JPEG
        if img.mode in ("RGBA", "LA", "P"):
            img = img.convert("RGBA")
            rgb_img = Image.new("RGB", img.size, (255, 255, 255))
            rgb_img.paste(img, mask=img.split()[-1])
            img = rgb_img
        elif img.mode != "RGB":
            img = img.convert("RGB")

        if img.width > max_width:
            ratio = max_width / img.width
            img = img.resize((max_width, int(img.height * ratio)), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format="JPEG", quality=85, optimize=True, progressive=True)
        compressed = output.getvalue()
        logger.debug(f"Image compressed: {size_kb:.1f}KB → {len(compressed) / 1024:.1f}KB")
        return compressed

    return safe_execute_sync(_compress, "Image compression", log_level="warning", default_return=image_bytes)


async def fetch_image_bytes(image_source: str, timeout_seconds: float = 10) -> Optional[bytes]:
    """Fetch image bytes from an http(s) URL or decode a data URL.

    Returns None on any failure (logged as warning).
    """
    if image_source.startswith("data:"):

        def _decode_data_url():
            _, encoded = image_source.split(",", 1)
            return base64.b64decode(encoded)

        return safe_execute_sync(_decode_data_url, "Decode data URL", default_return=None)

    async def _fetch_url():
        async with aiohttp.ClientSession() as session:
            async with session.get(image_source, timeout=aiohttp.ClientTimeout(total=timeout_seconds)) as response:
                response.raise_for_status()
                return await response.read()

    return await safe_execute_async(
        _fetch_url(),
        f"Fetch image from URL: {image_source}",
        default_return=None,
    )


def _is_file(text: str) -> bool:
    return safe_execute_sync(lambda: Path(text).is_file(), "Check image path", log_level="debug", default_return=False)


def _reference_from_url(url: str) -> str:
    path = urlparse(url).path
    return Path(path).name or url


async def load_image(
    source,
    max_size_mb: int = 5,
    compress: bool = True,
    compress_threshold_kb: int = 300,
    timeout_seconds: float = 10,
) -> ImagePayload:
    """Resolve an image source into an ImagePayload.

    Args:
        source: bytes, pathlib.Path, file path string, http(s) URL, data URL,
            plain base64 string, or an existing ImagePayload.
        max_size_mb: Payloads above this size keep only their reference.
        compress: Re-encode images above `compress_threshold_kb`.
        compress_threshold_kb: Compression threshold in KB.
        timeout_seconds: Timeout for fetching remote URLs.

    Returns:
        ImagePayload; `data` is None when bytes were unavailable or invalid.
    """
    if isinstance(source, ImagePayload):
        return source

    data: Optional[bytes] = None
    reference = ""
    url: Optional[str] = None

    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    elif isinstance(source, Path):
        reference = source.name
        data = safe_execute_sync(source.read_bytes, f"Read image file {source}", default_return=None)
    elif isinstance(source, str):
        text = source.strip()
        if text.startswith(("http://", "https://")):
            url = text
            reference = _reference_from_url(text)
            data = await fetch_image_bytes(text, timeout_seconds)
        elif text.startswith("data:"):
            data = await fetch_image_bytes(text, timeout_seconds)
        elif Path(text).suffix and _is_file(text):
            reference = Path(text).name
            data = safe_execute_sync(Path(text).read_bytes, f"Read image file {text}", default_return=None)
        else:

            def _decode_base64():
                return base64.b64decode(text, validate=True)

            data = safe_execute_sync(
                _decode_base64, "Decode base64 image string", log_level="debug", default_return=None
            )
            # Short strings are names, not encoded images: keep them as a hint for the mock lookup
            if len(text) <= MAX_REFERENCE_LENGTH:
                reference = text
    else:
        logger.warning(f"Unsupported image source type: {type(source).__name__}")

    if data is not None and not (validate_image_format(data) and validate_image_size(data, max_size_mb)):
        data = None

    if data is not None and compress:
        data = compress_image(data, compress_threshold_kb)

    return ImagePayload(data=data, reference=reference, url=url, mime_type=guess_mime_type(data))
