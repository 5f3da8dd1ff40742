"""
Module: builder

Purpose:
    Booklet building pipeline. Lays out pre-rasterised question images
    at their original printed size in themed columns, adds the answer
    key and watermark, and serializes a single PDF.

Key Functions:
    - build_document(): Main entry point (async)
    - build_document_sync(): Blocking wrapper
    - generate_test_pdf(): PDF bytes only
    - build_from_payload(): Build from the UI JSON payload

Key Classes:
    - EngineConfig: Engine configuration
    - BackgroundCache: Per-build background cache
    - BuildResult / BuildError: Build outcome

Dependencies:
    - reportlab: PDF generation
    - PIL: Image decoding
    - httpx: Theme artwork over HTTP
    - booklet_toolkit.themes: Theme registry

Used By:
    - Web and desktop front ends (outside this package)
"""

from .config import EngineConfig
from .assets import AssetFetchError, AssetFetcher, BackgroundCache, HttpAssetFetcher, LocalAssetFetcher
from .output import AnswerKeyMode, BuildStage
from .controller import (
    BuildError,
    BuildResult,
    build_document,
    build_document_sync,
    build_from_payload,
    generate_test_pdf,
    resolve_watermark,
)

__all__ = [
    # Config
    "EngineConfig",
    # Assets
    "AssetFetchError",
    "AssetFetcher",
    "BackgroundCache",
    "HttpAssetFetcher",
    "LocalAssetFetcher",
    # Output
    "AnswerKeyMode",
    "BuildStage",
    # Controller
    "build_document",
    "build_document_sync",
    "build_from_payload",
    "generate_test_pdf",
    "resolve_watermark",
    "BuildResult",
    "BuildError",
]
