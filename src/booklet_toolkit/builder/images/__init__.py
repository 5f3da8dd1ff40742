"""
Module: builder.images

Purpose:
    Image decoding for embedding into the booklet PDF.

Key Functions:
    - embed_image(): Bytes to ImageReader (PNG first, then JPEG)

Key Classes:
    - ImageEmbedError: Undecodable image data
"""

from .embedder import ImageEmbedError, embed_image, sniff_format

__all__ = [
    "ImageEmbedError",
    "embed_image",
    "sniff_format",
]
