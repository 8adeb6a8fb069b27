"""Re-encoding images as lower-quality JPEG in base64."""

from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import BinaryIO

import httpx
from PIL import Image, UnidentifiedImageError


def load_image(file_path: str | Path) -> Image.Image:
    """Open and fully load the image at ``file_path``."""
    with Image.open(file_path) as img:
        img.load()
        return img.copy()


def compress_to_base64(data: bytes | BinaryIO, quality: int) -> str:
    """Re-encode an image as JPEG at ``quality`` (1-100) and return it base64-encoded.

    The dimensions are kept. Raises ValueError if the data is not an image.
    """
    source = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data
    try:
        with Image.open(source) as img:
            img.load()
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"failed to decode image: {exc}") from exc
    quality = max(1, min(100, quality))
    buffer = io.BytesIO()
    try:
        rgb.save(buffer, format="JPEG", quality=quality)
    except OSError as exc:
        raise ValueError(f"failed to encode image: {exc}") from exc
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def compress_file_to_base64(filename: str | Path, quality: int) -> str:
    """Compress a local image file; see :func:`compress_to_base64`."""
    with open(filename, "rb") as handle:
        return compress_to_base64(handle, quality)


def compress_url_to_base64(url: str, quality: int) -> str:
    """Download an image and compress it; see :func:`compress_to_base64`."""
    response = httpx.get(url, follow_redirects=True)
    return compress_to_base64(response.content, quality)