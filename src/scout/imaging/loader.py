"""
Turn an image reference into a 32x32 luminance grid.

Accepted references: raw bytes, a local Path, a base64 image data URI, or an
http(s) URL. URLs are handed to a caller-supplied fetcher; this module never
opens a network connection itself.
"""

import base64
import binascii
import io
import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Union
from urllib.parse import urlparse

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, InputError, UnsupportedSourceError
from ..schemas.base import PerceptualHash
from .phash import GRID_SIZE, compute_phash

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(r"^data:image/(?:png|jpe?g|webp|gif);base64,", re.IGNORECASE)

DEFAULT_MAX_IMAGE_PIXELS = 20_000_000

ImageSource = Union[str, Path, bytes, bytearray]
Fetcher = Callable[[str], bytes]


def is_data_uri(value: str) -> bool:
    return bool(DATA_URI_PATTERN.match(value))


def describe_source(source: ImageSource) -> str:
    """Short, PII-free label for a source (used in logs and CLI output)."""
    if isinstance(source, (bytes, bytearray)):
        return f"bytes[{len(source)}]"
    if isinstance(source, Path):
        return source.name
    if isinstance(source, str):
        if is_data_uri(source):
            return "data-uri"
        parsed = urlparse(source)
        if parsed.scheme in ("http", "https") and parsed.hostname:
            return f"{parsed.scheme}://{parsed.hostname}"
    return "unknown"


def _decode_data_uri(value: str) -> bytes:
    payload = "".join(value.split(",", 1)[1].split())
    if not payload:
        raise DecodeError("Data URI has an empty payload")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Data URI payload is not valid base64: {e}")


def load_image_bytes(source: ImageSource, fetcher: Optional[Fetcher] = None) -> bytes:
    """
    Resolve an image reference to raw bytes.

    Args:
        source: bytes, Path, data URI or http(s) URL
        fetcher: callable(url) -> bytes, required for http(s) URLs

    Returns:
        Encoded image bytes (not yet decoded)

    Raises:
        InputError: source missing, wrong type, or URL given without a fetcher
        DecodeError: data URI payload is not base64
        UnsupportedSourceError: string is neither a data URI nor an http(s) URL
    """
    if source is None or (isinstance(source, (str, bytes, bytearray)) and not source):
        raise InputError("An image source is required")

    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, Path):
        if not source.is_file():
            raise InputError(f"Image file not found: {source}")
        return source.read_bytes()

    if not isinstance(source, str):
        raise InputError(
            f"Unsupported image source type: {type(source).__name__}. "
            "Use a data URI, an http(s) URL, a Path, or bytes."
        )

    if is_data_uri(source):
        return _decode_data_uri(source)

    parsed = urlparse(source.strip())
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise UnsupportedSourceError(
            "Image must be a base64 data URI (png, jpeg, webp, gif) or an http(s) URL"
        )

    if fetcher is None:
        raise InputError("http(s) image references need a fetcher; none was configured")

    logger.debug("Fetching image via fetcher from %s", describe_source(source))
    data = fetcher(source.strip())
    if not isinstance(data, (bytes, bytearray)):
        raise InputError(f"Fetcher returned {type(data).__name__}, expected bytes")
    return bytes(data)


def decode_luminance_grid(
    data: bytes,
    size: int = GRID_SIZE,
    max_pixels: int = DEFAULT_MAX_IMAGE_PIXELS,
) -> List[List[int]]:
    """Decode image bytes into a size x size grid of 0-255 luminance values."""
    if not data:
        raise InputError("No image payload supplied")

    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if width * height > max_pixels:
                raise DecodeError(
                    f"Image has {width * height} pixels, limit is {max_pixels}"
                )
            gray = img.convert("L").resize((size, size), Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise DecodeError(f"Could not decode image: {e}")

    raw = gray.tobytes()
    logger.debug("Decoded %dx%d image to %dx%d grid", width, height, size, size)
    return [list(raw[y * size : (y + 1) * size]) for y in range(size)]


def fingerprint_image(
    source: ImageSource,
    fetcher: Optional[Fetcher] = None,
    max_pixels: int = DEFAULT_MAX_IMAGE_PIXELS,
) -> PerceptualHash:
    """Load, decode and hash an image reference in one call."""
    data = load_image_bytes(source, fetcher=fetcher)
    grid = decode_luminance_grid(data, max_pixels=max_pixels)
    return compute_phash(grid)
