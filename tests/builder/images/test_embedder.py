"""
Tests for builder.images.embedder
"""

import pytest

from booklet_toolkit.builder.images import ImageEmbedError, embed_image, sniff_format


class TestSniffFormat:
    def test_sniff_when_png_then_png(self, png_bytes):
        assert sniff_format(png_bytes) == "PNG"

    def test_sniff_when_jpeg_then_jpeg(self, jpeg_bytes):
        assert sniff_format(jpeg_bytes) == "JPEG"

    def test_sniff_when_unknown_then_none(self):
        assert sniff_format(b"GIF89a") is None


class TestEmbedImage:
    def test_embed_when_png_then_reader_with_size(self, png_bytes):
        assert embed_image(png_bytes).getSize() == (64, 32)

    def test_embed_when_jpeg_then_lossy_fallback_decodes(self, jpeg_bytes):
        assert embed_image(jpeg_bytes).getSize() == (64, 32)

    def test_embed_when_empty_then_raises(self):
        with pytest.raises(ImageEmbedError, match="Empty"):
            embed_image(b"")

    def test_embed_when_garbage_then_raises_with_each_decoder(self):
        with pytest.raises(ImageEmbedError) as exc_info:
            embed_image(b"definitely not an image")
        assert "PNG" in str(exc_info.value)
        assert "JPEG" in str(exc_info.value)

    def test_embed_when_png_signature_with_garbage_then_raises(self):
        with pytest.raises(ImageEmbedError):
            embed_image(b"\x89PNG\r\n\x1a\n" + b"\0" * 100)
