"""
Module: builder.images.embedder

Purpose:
    Turn encoded image bytes into something ReportLab can embed.
    Tries the lossless (PNG) decoder first and falls back to the lossy
    (JPEG) decoder, mirroring how question rasters and background
    artwork are delivered.

Key Functions:
    - embed_image(): Decode bytes into an ImageReader
    - sniff_format(): Identify PNG / JPEG by magic bytes

Key Classes:
    - ImageEmbedError: Exception for undecodable bytes

Dependencies:
    - PIL: Decoding and verification
    - reportlab: ImageReader

Used By:
    - builder.assets.cache: Background artwork
    - builder.output.renderer: Question images, image watermarks
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

logger = logging.getLogger(__name__)

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
_JPEG_MAGIC = b"\xff\xd8\xff"

# Embedding order: lossless first, lossy second
EMBED_FORMATS = ("PNG", "JPEG")


class ImageEmbedError(Exception):
    """Image bytes could not be decoded for embedding."""
    pass


def sniff_format(data: bytes) -> Optional[str]:
    """
    Identify image format by magic bytes.

    Returns:
        "PNG", "JPEG" or None
    """
    if data.startswith(_PNG_MAGIC):
        return "PNG"
    if data.startswith(_JPEG_MAGIC):
        return "JPEG"
    return None


def _decode(data: bytes, fmt: str) -> Image.Image:
    img = Image.open(io.BytesIO(data), formats=[fmt])
    img.load()
    return img


def embed_image(data: bytes) -> ImageReader:
    """
    Decode image bytes for embedding.

    Each supported format is tried in turn (PNG, then JPEG); the first
    that decodes wins.

    Args:
        data: Encoded image bytes

    Returns:
        ImageReader wrapping the decoded image

    Raises:
        ImageEmbedError: If no decoder accepts the bytes

    Example:
        >>> reader = embed_image(png_bytes)
        >>> reader.getSize()
        (1200, 600)
    """
    if not data:
        raise ImageEmbedError("Empty image data")

    errors = []
    for fmt in EMBED_FORMATS:
        try:
            img = _decode(data, fmt)
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
            errors.append(f"{fmt}: {e}")
            continue
        logger.debug(f"Decoded {fmt} image {img.width}x{img.height}")
        return ImageReader(img)

    raise ImageEmbedError("Unsupported image data (" + "; ".join(errors) + ")")
