"""Raster image transcoding for PDF embedding."""

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

JPEG_QUALITY = 85


class ImageDecodeError(ValueError):
    """Raised when bytes are not a decodable raster image."""


def to_jpeg(image_bytes: bytes, quality: int = JPEG_QUALITY) -> Tuple[bytes, Tuple[int, int]]:
    """Re-encode any Pillow-readable image as baseline RGB JPEG.

    Args:
        image_bytes: Encoded image (PNG, JPEG, GIF, WebP, ...)
        quality: JPEG quality

    Returns:
        Tuple of (jpeg_bytes, (width, height)) in pixels

    Raises:
        ImageDecodeError: If Pillow cannot decode the bytes
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()

        # JPEG has no alpha channel or palette
        if img.mode != "RGB":
            img = img.convert("RGB")

        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=quality)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        MemoryError,
    ) as exc:
        raise ImageDecodeError(f"Cannot decode image: {exc}") from exc
    return buf.getvalue(), img.size
