"""
Module: builder.config

Purpose:
    Engine configuration for booklet builds. Immutable configuration
    with validation on construction.

Key Classes:
    - EngineConfig: Asset source, cache size, document strings, geometry

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Build orchestration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from booklet_toolkit.core.geometry import PageGeometry

from .assets.cache import DEFAULT_MAX_ENTRIES
from .assets.fetcher import AssetFetcher, HttpAssetFetcher, LocalAssetFetcher

DEFAULT_CREATOR = "Akilli Test Olusturucu"
DEFAULT_PRODUCER = "PDF Test Generator v1.0"


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for the booklet engine (immutable).

    At most one asset source may be set. With neither, backgrounds are
    disabled and every page gets a plain white background.

    Attributes:
        asset_base_url: Base URL theme artwork is served from
        asset_root: Local directory holding theme artwork
        fetch_timeout: HTTP timeout in seconds (None waits indefinitely)
        background_cache_size: Backgrounds kept per build
        creator: PDF creator string
        producer: PDF producer string
        geometry: Page geometry

    Example:
        >>> config = EngineConfig(asset_root=Path("public"))
        >>> isinstance(config.make_fetcher(), LocalAssetFetcher)
        True
    """

    asset_base_url: Optional[str] = None
    asset_root: Optional[Path] = None
    fetch_timeout: Optional[float] = None
    background_cache_size: int = DEFAULT_MAX_ENTRIES
    creator: str = DEFAULT_CREATOR
    producer: str = DEFAULT_PRODUCER
    geometry: PageGeometry = field(default_factory=PageGeometry)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.asset_base_url and self.asset_root is not None:
            raise ValueError("Configure either asset_base_url or asset_root, not both")
        if self.asset_root is not None and not isinstance(self.asset_root, Path):
            object.__setattr__(self, "asset_root", Path(self.asset_root))
        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ValueError(f"fetch_timeout must be positive: {self.fetch_timeout}")
        if self.background_cache_size < 1:
            raise ValueError(f"background_cache_size must be >= 1: {self.background_cache_size}")
        if not self.creator or not self.producer:
            raise ValueError("creator and producer must not be empty")

    def make_fetcher(self) -> Optional[AssetFetcher]:
        """Asset fetcher for the configured source, or None."""
        if self.asset_base_url:
            return HttpAssetFetcher(self.asset_base_url, timeout=self.fetch_timeout)
        if self.asset_root is not None:
            return LocalAssetFetcher(self.asset_root)
        return None
