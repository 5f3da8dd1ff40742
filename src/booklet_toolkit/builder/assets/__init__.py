"""
Module: builder.assets

Purpose:
    Theme artwork access and the per-build background cache.

Key Classes:
    - AssetFetcher / HttpAssetFetcher / LocalAssetFetcher: Asset sources
    - BackgroundCache: Scoped background cache
    - AssetFetchError: Unavailable asset
"""

from .fetcher import AssetFetchError, AssetFetcher, HttpAssetFetcher, LocalAssetFetcher
from .cache import GENERIC_BACKGROUNDS, BackgroundCache

__all__ = [
    "AssetFetchError",
    "AssetFetcher",
    "HttpAssetFetcher",
    "LocalAssetFetcher",
    "BackgroundCache",
    "GENERIC_BACKGROUNDS",
]
