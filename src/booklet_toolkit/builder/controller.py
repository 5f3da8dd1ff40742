"""
Module: builder.controller

Purpose:
    Orchestrate a complete booklet build.
    Validate → Resolve theme → Render pages → Answer key → Footers and
    watermark → Metadata → Serialize

Key Functions:
    - build_document(): Main entry point (async)
    - generate_test_pdf(): PDF bytes only (async)
    - build_document_sync(): Blocking wrapper
    - build_from_payload(): Build from the UI JSON payload (async)

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - themes: Theme registry
    - builder.assets: Background cache
    - builder.output: Renderer, answer key, document information

Used By:
    - Web and desktop front ends (outside this package)
"""

from __future__ import annotations

import asyncio
import io
import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from booklet_toolkit.core.models.metadata import Metadata, ThemedMetadata
from booklet_toolkit.core.models.options import GenerationOptions, WatermarkSpec
from booklet_toolkit.core.models.questions import Question
from booklet_toolkit.core.schemas.validator import ValidationError
from booklet_toolkit.core.utils.serialization import deserialize_payload
from booklet_toolkit.core.utils.text import generate_test_filename
from booklet_toolkit.themes import ThemeRegistry, default_registry
from booklet_toolkit.themes.plugin import ThemePlugin

from .assets.cache import BackgroundCache
from .assets.fetcher import AssetFetcher
from .config import EngineConfig
from .layout.models import LayoutResult
from .output.answer_key import AnswerKeyMode, answer_key_keywords, resolve_answer_key_mode
from .output.canvas import new_canvas
from .output.metadata import document_info, stamp_document_info
from .output.renderer import PageRenderer, prepare_watermark

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during booklet build."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_bytes: The serialized PDF
        page_count: Total pages, answer-key pages included
        question_page_count: Pages holding questions
        answer_key_mode: How the answer key was delivered
        layout: Per-page layout record
        watermark: Watermark applied to question pages (None if none)
        warnings: Warnings raised during the build
        filename: Suggested download file name

    Example:
        >>> result = build_document_sync(metadata, questions)
        >>> print(f"{result.page_count} pages, key: {result.answer_key_mode.value}")
    """

    pdf_bytes: bytes
    page_count: int
    question_page_count: int
    answer_key_mode: AnswerKeyMode
    layout: LayoutResult
    watermark: Optional[WatermarkSpec]
    warnings: tuple[str, ...]
    filename: str


def resolve_watermark(options: GenerationOptions, plugin: ThemePlugin) -> Optional[WatermarkSpec]:
    """
    Watermark for a build: explicit option, else the theme default, else none.

    An explicit watermark with kind=none disables the theme default.
    """
    if options.watermark is not None:
        return options.watermark if options.watermark.is_visible else None
    default = plugin.config.default_watermark
    if default is not None and default.is_visible:
        return default
    return None


def _resolve_layout(options: GenerationOptions, metadata: Metadata, plugin: ThemePlugin) -> tuple[int, float]:
    """Column count and question spacing after overrides."""
    layout = plugin.config.layout
    overrides = options.custom_layout

    columns = layout.columns
    if overrides is not None and overrides.columns is not None:
        columns = overrides.columns

    spacing: float = layout.question_spacing
    if overrides is not None and overrides.question_spacing is not None:
        spacing = overrides.question_spacing
    elif metadata.question_spacing is not None:
        spacing = metadata.question_spacing
    return columns, spacing


def _check_inputs(metadata: Any, questions: Any, options: Any) -> None:
    if not isinstance(metadata, Metadata):
        raise BuildError(f"metadata must be a Metadata instance, got {type(metadata).__name__}")
    if isinstance(questions, (str, bytes)) or not isinstance(questions, Sequence):
        raise BuildError("questions must be a sequence of Question")
    bad = [i for i, q in enumerate(questions) if not isinstance(q, Question)]
    if bad:
        raise BuildError(f"questions[{bad[0]}] is not a Question")
    ids = [q.id for q in questions]
    if len(set(ids)) != len(ids):
        raise BuildError("Question ids must be unique")
    if not isinstance(options, GenerationOptions):
        raise BuildError(f"options must be GenerationOptions, got {type(options).__name__}")


async def build_document(
    metadata: Metadata,
    questions: Sequence[Question],
    options: Optional[GenerationOptions] = None,
    *,
    registry: Optional[ThemeRegistry] = None,
    cache: Optional[BackgroundCache] = None,
    fetcher: Optional[AssetFetcher] = None,
    config: Optional[EngineConfig] = None,
    issued_on: Optional[date] = None,
) -> BuildResult:
    """
    Build a booklet PDF from start to finish.

    Pipeline:
    1. Validate inputs
    2. Resolve the theme (unknown ids fall back to the default)
    3. Render question pages (backgrounds via the scoped cache)
    4. Answer key page, hidden keywords, or neither
    5. Footers, then watermarks, on every page
    6. Stamp document information and serialize

    Args:
        metadata: Test metadata
        questions: Questions in any order (printed by ascending order)
        options: Generation options (defaults to the classic theme)
        registry: Theme registry (defaults to the bundled themes)
        cache: Background cache; reset on entry and exit
        fetcher: Asset fetcher for a fresh cache (overrides config)
        config: Engine configuration
        issued_on: Date printed in headers (defaults to today)

    Returns:
        BuildResult with the PDF bytes and layout record

    Raises:
        BuildError: If the inputs are malformed or serialization fails

    Example:
        >>> result = await build_document(metadata, questions, GenerationOptions(theme_id="yks-2025"))
        >>> Path(result.filename).write_bytes(result.pdf_bytes)
    """
    options = options if options is not None else GenerationOptions()
    config = config or EngineConfig()
    registry = registry or default_registry
    start_time = time.perf_counter()

    try:
        # 1. Validate inputs
        _check_inputs(metadata, questions, options)
        logger.info(f"Starting build of {len(questions)} questions with theme {options.theme_id!r}")

        # 2. Resolve theme
        plugin = registry.resolve(options.theme_id)
        columns, spacing = _resolve_layout(options, metadata, plugin)
        themed = ThemedMetadata.from_metadata(metadata, options.custom_fields, issued_on=issued_on)
        key_mode = resolve_answer_key_mode(options, plugin.config)
        watermark = resolve_watermark(options, plugin)
        logger.info(
            f"Theme {plugin.id!r}: {columns} column(s), spacing {spacing}, answer key {key_mode.value}"
        )

        if cache is None:
            cache = BackgroundCache(
                fetcher if fetcher is not None else config.make_fetcher(),
                max_entries=config.background_cache_size,
            )

        buffer = io.BytesIO()
        canvas = new_canvas(buffer, (config.geometry.page_width, config.geometry.page_height))

        with cache.scoped():
            renderer = PageRenderer(
                canvas,
                plugin,
                themed,
                cache,
                columns=columns,
                spacing=spacing,
                geometry=config.geometry,
            )

            # 3. Question pages
            await renderer.render_questions(questions)

            # 4. Answer key
            keywords = None
            if key_mode is AnswerKeyMode.PAGE:
                renderer.add_answer_key_pages(questions)
            elif key_mode is AnswerKeyMode.METADATA:
                keywords = answer_key_keywords(questions)

            # 5. Footers and watermarks
            prepared = await prepare_watermark(watermark)
            faint = await prepare_watermark(watermark.attenuated() if watermark else None)
            renderer.add_footers_and_watermarks(prepared, faint)

            # 6. Document information and serialization
            info = document_info(metadata, creator=config.creator, producer=config.producer, keywords=keywords)
            stamp_document_info(canvas, info)
            renderer.serialize()

        layout = renderer.layout_result()
    except BuildError:
        raise
    except Exception as e:
        logger.error(f"Build failed: {e}")
        raise BuildError(f"Failed to build booklet: {e}") from e

    pdf_bytes = buffer.getvalue()
    elapsed = time.perf_counter() - start_time
    logger.info(f"Booklet generated: {layout.page_count} pages, {len(pdf_bytes)} bytes in {elapsed:.2f}s")

    return BuildResult(
        pdf_bytes=pdf_bytes,
        page_count=layout.page_count,
        question_page_count=layout.question_page_count,
        answer_key_mode=key_mode,
        layout=layout,
        watermark=watermark,
        warnings=tuple(layout.warnings),
        filename=generate_test_filename(metadata.class_name, metadata.course_name, metadata.test_name, issued_on),
    )


async def generate_test_pdf(
    metadata: Metadata,
    questions: Sequence[Question],
    options: Optional[GenerationOptions] = None,
    **kwargs: Any,
) -> bytes:
    """Build a booklet and return only the PDF bytes."""
    result = await build_document(metadata, questions, options, **kwargs)
    return result.pdf_bytes


def build_document_sync(
    metadata: Metadata,
    questions: Sequence[Question],
    options: Optional[GenerationOptions] = None,
    **kwargs: Any,
) -> BuildResult:
    """Blocking wrapper around build_document (not for use inside a running loop)."""
    return asyncio.run(build_document(metadata, questions, options, **kwargs))


async def build_from_payload(payload: Any, **kwargs: Any) -> BuildResult:
    """
    Build from the UI JSON payload.

    Args:
        payload: ``{"metadata": {...}, "questions": [...], "options": {...}}``
        **kwargs: Passed to build_document

    Raises:
        BuildError: If the payload is invalid or the build fails
    """
    try:
        metadata, questions, options = deserialize_payload(payload)
    except ValidationError as e:
        raise BuildError(f"Invalid payload: {e}") from e
    return await build_document(metadata, questions, options, **kwargs)
