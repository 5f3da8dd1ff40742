"""
Module: builder.assets.cache

Purpose:
    Per-build cache of embedded background artwork. Each theme's
    background is fetched and decoded at most once per build; a failed
    lookup is remembered so it is never retried within the same build.

Key Classes:
    - BackgroundCache: Scoped cache with an "attempted" set

Dependencies:
    - builder.assets.fetcher: AssetFetcher, AssetFetchError
    - builder.images.embedder: embed_image, ImageEmbedError
    - reportlab: ImageReader (cached value type)

Used By:
    - builder.output.renderer: Page backgrounds
    - builder.controller: Cache scope per build
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator, List, Optional

from reportlab.lib.utils import ImageReader

from booklet_toolkit.themes.models import ThemeConfig

from ..images.embedder import ImageEmbedError, embed_image, sniff_format
from .fetcher import AssetFetcher, AssetFetchError

logger = logging.getLogger(__name__)

# Tried after a theme's own artwork and family fallbacks
GENERIC_BACKGROUNDS = ("/themes/test-02.png",)

# Responses smaller than this are error pages or truncated files
MIN_ASSET_BYTES = 100

DEFAULT_MAX_ENTRIES = 5


class BackgroundCache:
    """
    Background artwork cache for one build.

    Keyed by ``f"{theme_id}_{background_path}"``. Hits return
    immediately; keys already attempted without success return None
    without any I/O. The cache is reset when a build's scope opens and
    again when it closes.

    Attributes:
        fetcher: Asset source (None disables backgrounds)
        max_entries: Entries kept before the oldest is evicted
        fetch_count: Number of fetch calls issued (diagnostics)

    Example:
        >>> cache = BackgroundCache(LocalAssetFetcher(Path("public")))
        >>> with cache.scoped():
        ...     image = await cache.resolve(theme.config)
    """

    def __init__(self, fetcher: Optional[AssetFetcher], max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1: {max_entries}")
        self.fetcher = fetcher
        self.max_entries = max_entries
        self.fetch_count = 0
        self._entries: "OrderedDict[str, ImageReader]" = OrderedDict()
        self._attempted: set[str] = set()

    @staticmethod
    def cache_key(theme: ThemeConfig) -> str:
        return f"{theme.id}_{theme.background_path}"

    @staticmethod
    def candidates(theme: ThemeConfig) -> List[str]:
        """Candidate paths in order, without duplicates."""
        ordered: List[str] = []
        for path in (theme.background_path, *theme.background_fallbacks, *GENERIC_BACKGROUNDS):
            if path and path not in ordered:
                ordered.append(path)
        return ordered

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, theme: ThemeConfig) -> bool:
        return self.cache_key(theme) in self._entries

    def was_attempted(self, theme: ThemeConfig) -> bool:
        return self.cache_key(theme) in self._attempted

    def reset(self) -> None:
        """Clear cached artwork and the attempted set."""
        self._entries.clear()
        self._attempted.clear()

    @contextmanager
    def scoped(self) -> Iterator["BackgroundCache"]:
        """Reset on entry and on exit, whatever happens in between."""
        self.reset()
        try:
            yield self
        finally:
            self.reset()

    async def resolve(self, theme: ThemeConfig) -> Optional[ImageReader]:
        """
        Background artwork for a theme.

        Args:
            theme: Theme configuration

        Returns:
            Embedded artwork, or None when the theme has no background or
            every candidate failed (the caller paints white instead)
        """
        if not theme.background_path:
            return None

        key = self.cache_key(theme)
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        if key in self._attempted:
            return None

        self._attempted.add(key)
        if self.fetcher is None:
            logger.info(f"No asset source configured; theme {theme.id!r} renders without artwork")
            return None

        for path in self.candidates(theme):
            image = await self._load(path)
            if image is not None:
                self._store(key, image)
                logger.info(f"Background for theme {theme.id!r} loaded from {path}")
                return image

        logger.warning(f"No usable background for theme {theme.id!r}; using plain white")
        return None

    async def _load(self, path: str) -> Optional[ImageReader]:
        if path.lower().endswith(".svg"):
            logger.debug(f"Skipping vector artwork {path}")
            return None

        self.fetch_count += 1
        try:
            data = await self.fetcher.fetch(path)
        except AssetFetchError as e:
            logger.warning(f"Background {path} unavailable: {e}")
            return None

        if len(data) < MIN_ASSET_BYTES:
            logger.warning(f"Background {path} too small ({len(data)} bytes)")
            return None

        try:
            image = await asyncio.to_thread(embed_image, data)
        except ImageEmbedError as e:
            logger.warning(f"Background {path} ({sniff_format(data) or 'unknown format'}) not embeddable: {e}")
            return None
        return image

    def _store(self, key: str, image: ImageReader) -> None:
        self._entries[key] = image
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted background {evicted}")
