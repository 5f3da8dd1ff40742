"""
Tests for builder.assets.fetcher

HTTP is faked with httpx.MockTransport; local files use tmp_path.
"""

import asyncio

import httpx
import pytest

from booklet_toolkit.builder.assets import AssetFetchError, HttpAssetFetcher, LocalAssetFetcher


def _transport(status: int, content: bytes = b"", seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        return httpx.Response(status, content=content)

    return httpx.MockTransport(handler)


class TestHttpAssetFetcher:
    def test_fetch_when_ok_then_bytes_from_joined_url(self, png_bytes):
        seen = []
        fetcher = HttpAssetFetcher("https://assets.example/", transport=_transport(200, png_bytes, seen))

        data = asyncio.run(fetcher.fetch("/themes/test-02.png"))

        assert data == png_bytes
        assert seen == ["https://assets.example/themes/test-02.png"]

    def test_fetch_when_404_then_asset_fetch_error(self):
        fetcher = HttpAssetFetcher("https://assets.example", transport=_transport(404))
        with pytest.raises(AssetFetchError, match="404"):
            asyncio.run(fetcher.fetch("/themes/missing.png"))

    def test_fetch_when_transport_fails_then_asset_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        fetcher = HttpAssetFetcher("https://assets.example", transport=httpx.MockTransport(handler))
        with pytest.raises(AssetFetchError, match="failed"):
            asyncio.run(fetcher.fetch("/themes/a.png"))

    def test_init_when_default_then_no_timeout(self):
        assert HttpAssetFetcher("https://assets.example").timeout is None


class TestLocalAssetFetcher:
    def test_fetch_when_file_exists_then_bytes(self, tmp_path, png_bytes):
        (tmp_path / "themes").mkdir()
        (tmp_path / "themes" / "test-02.png").write_bytes(png_bytes)

        data = asyncio.run(LocalAssetFetcher(tmp_path).fetch("/themes/test-02.png"))

        assert data == png_bytes

    def test_fetch_when_missing_then_asset_fetch_error(self, tmp_path):
        with pytest.raises(AssetFetchError, match="Cannot read"):
            asyncio.run(LocalAssetFetcher(tmp_path).fetch("/themes/none.png"))

    def test_fetch_when_path_escapes_root_then_asset_fetch_error(self, tmp_path):
        root = tmp_path / "public"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("x")
        with pytest.raises(AssetFetchError, match="escapes"):
            asyncio.run(LocalAssetFetcher(root).fetch("../secret.txt"))
