"""
Module: builder.assets.fetcher

Purpose:
    Abstract interface for fetching static theme artwork, with an HTTP
    implementation (static asset server) and a local-directory one.

Key Classes:
    - AssetFetcher: Abstract base class for asset access
    - HttpAssetFetcher: Fetches from a base URL with httpx
    - LocalAssetFetcher: Reads from a static directory
    - AssetFetchError: Exception for unavailable assets

Dependencies:
    - httpx: Async HTTP client
    - asyncio (std): Off-loop file reads

Used By:
    - builder.assets.cache: Background artwork
    - builder.controller: Default fetcher from EngineConfig
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class AssetFetchError(Exception):
    """Asset could not be fetched."""
    pass


class AssetFetcher(ABC):
    """
    Abstract interface for static asset access.

    Paths are site-absolute ("/themes/test-02.png"); implementations map
    them onto their storage.
    """

    @abstractmethod
    async def fetch(self, path: str) -> bytes:
        """
        Fetch an asset.

        Args:
            path: Site-absolute asset path

        Returns:
            Raw asset bytes

        Raises:
            AssetFetchError: If the asset is unavailable
        """


class HttpAssetFetcher(AssetFetcher):
    """
    Fetch assets from a static file server.

    No timeout is applied by default; pass one explicitly if the
    server may hang.

    Example:
        >>> fetcher = HttpAssetFetcher("https://example.org")
        >>> data = await fetcher.fetch("/themes/test-02.png")
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, path: str) -> bytes:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AssetFetchError(f"GET {url} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AssetFetchError(f"GET {url} failed: {e}") from e

        logger.debug(f"Fetched {url} ({len(resp.content)} bytes)")
        return resp.content


class LocalAssetFetcher(AssetFetcher):
    """
    Read assets from a static directory (e.g. the web app's public/ folder).

    Paths may not escape the root directory.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        candidate = (self.root / path.lstrip("/")).resolve()
        if self.root not in candidate.parents and candidate != self.root:
            raise AssetFetchError(f"Asset path escapes static root: {path}")
        return candidate

    async def fetch(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            data = await asyncio.to_thread(target.read_bytes)
        except OSError as e:
            raise AssetFetchError(f"Cannot read {target}: {e}") from e
        logger.debug(f"Read {target} ({len(data)} bytes)")
        return data
