"""
Module: builder.output.renderer

Purpose:
    Page renderer and document assembler. Walks the ordered questions
    through the content-area allocator and layout planner, draws each
    page (background, header, questions), appends answer-key pages and
    finally runs the footer and watermark pass over every page.

    Stage order:
        NEEDS_NEW_PAGE -> PLACING_QUESTIONS -> PAGE_FULL (-> NEEDS_NEW_PAGE)
        -> ALL_QUESTIONS_PLACED -> ADDING_ANSWER_KEY -> ADDING_FOOTERS
        -> SERIALIZING -> DONE

    Footers run after the answer key so the page total includes the
    answer-key pages.

Key Classes:
    - PageRenderer: Stateful renderer for one build
    - BuildStage: Renderer stages

Key Functions:
    - prepare_watermark(): Decode image watermark content ahead of drawing

Dependencies:
    - reportlab: Canvas drawing
    - builder.layout: Allocator and planner
    - builder.assets: Background cache
    - builder.images: Question image embedding

Used By:
    - builder.controller: Build orchestration
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.models.options import WatermarkKind, WatermarkSpec
from booklet_toolkit.core.models.questions import Question
from booklet_toolkit.core.utils.serialization import decode_data_url
from booklet_toolkit.themes.defaults import (
    BOLD_FONT,
    FONT,
    INK,
    continuation_content_top,
    draw_continuation_header,
    draw_default_footer,
    fill,
)
from booklet_toolkit.themes.plugin import ThemePlugin
from booklet_toolkit.themes.watermark import PreparedWatermark

from ..assets.cache import BackgroundCache
from ..images.embedder import ImageEmbedError, embed_image
from ..layout.allocator import advance_column, consume, open_area
from ..layout.models import ContentArea, LayoutResult, PageKind, PagePlan, QuestionLayout
from ..layout.planner import natural_size, place_question
from .answer_key import answer_key_entries, draw_answer_key_page, paginate_answer_key
from .canvas import DeferredPageCanvas

logger = logging.getLogger(__name__)

NUMBER_FONT_SIZE = 11
NUMBER_LABEL_RISE = 3.0

PLACEHOLDER_BORDER = (0.9, 0.9, 0.9)
PLACEHOLDER_FILL = (0.98, 0.98, 0.98)
PLACEHOLDER_INK = (0.45, 0.45, 0.45)
IMAGE_UNAVAILABLE_TEXT = "Gorsel yuklenemedi"

# Height of the placeholder drawn for a question that fits no empty column
OVERSIZED_PLACEHOLDER_HEIGHT = 60.0


class BuildStage(str, Enum):
    NEEDS_NEW_PAGE = "needs_new_page"
    PLACING_QUESTIONS = "placing_questions"
    PAGE_FULL = "page_full"
    ALL_QUESTIONS_PLACED = "all_questions_placed"
    ADDING_ANSWER_KEY = "adding_answer_key"
    ADDING_FOOTERS = "adding_footers"
    SERIALIZING = "serializing"
    DONE = "done"


async def prepare_watermark(spec: Optional[WatermarkSpec]) -> PreparedWatermark:
    """
    Make a watermark ready to draw.

    Image content (bytes or a base64 data URL) is decoded here. A
    watermark image that cannot be decoded is skipped: the returned
    PreparedWatermark is simply not drawable.

    Args:
        spec: Resolved watermark, or None

    Returns:
        PreparedWatermark (never raises for bad artwork)
    """
    spec = spec or WatermarkSpec()
    if spec.kind is not WatermarkKind.IMAGE or not spec.content:
        return PreparedWatermark(spec=spec)

    try:
        data = spec.content if isinstance(spec.content, bytes) else decode_data_url(spec.content)
        image = await asyncio.to_thread(embed_image, data)
    except (ValueError, ImageEmbedError) as e:
        logger.info(f"Watermark image skipped: {e}")
        return PreparedWatermark(spec=spec)
    return PreparedWatermark(spec=spec, image=image)


class PageRenderer:
    """
    Renders one booklet onto a deferred canvas.

    One instance per build. The renderer owns the page bookkeeping
    (page kinds, plans, warnings) and the active content area; the
    canvas is only serialized by serialize().

    Attributes:
        canvas: Deferred canvas being drawn
        plugin: Theme plugin with every hook set
        metadata: Metadata merged with theme fields
        cache: Background cache (already scoped by the caller)
        columns: Column count for question pages
        spacing: Question spacing in points
        geometry: Page geometry
        stage: Current stage
        stage_history: Every stage entered, in order

    Example:
        >>> renderer = PageRenderer(c, plugin, themed, cache, columns=2, spacing=5)
        >>> await renderer.render_questions(questions)
        >>> renderer.add_answer_key_pages(questions)
        >>> renderer.add_footers_and_watermarks(watermark, watermark)
        >>> renderer.serialize()
    """

    def __init__(
        self,
        canvas: DeferredPageCanvas,
        plugin: ThemePlugin,
        metadata: ThemedMetadata,
        cache: BackgroundCache,
        *,
        columns: int,
        spacing: float,
        geometry: PageGeometry = PageGeometry(),
    ) -> None:
        if not plugin.is_complete:
            plugin = plugin.with_defaults()
        self.canvas = canvas
        self.plugin = plugin
        self.metadata = metadata
        self.cache = cache
        self.columns = max(1, int(columns))
        self.spacing = max(0.0, float(spacing))
        self.geometry = geometry

        self.stage = BuildStage.NEEDS_NEW_PAGE
        self.stage_history: List[BuildStage] = [self.stage]
        self.warnings: List[str] = []
        self.question_page_map: Dict[str, int] = {}
        self.skipped_question_ids: List[str] = []

        self._page_kinds: List[PageKind] = []
        self._plans: List[PagePlan] = []
        self._placements: List[QuestionLayout] = []
        self._area: Optional[ContentArea] = None

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _enter(self, stage: BuildStage) -> None:
        self.stage = stage
        self.stage_history.append(stage)

    @property
    def page_count(self) -> int:
        return len(self._page_kinds)

    @property
    def page_index(self) -> int:
        return len(self._page_kinds) - 1

    def _close_page(self) -> None:
        """Finish the open page and record its plan."""
        kind = self._page_kinds[-1]
        columns_used = len({p.column for p in self._placements})
        self._plans.append(PagePlan(
            index=self.page_index,
            kind=kind,
            placements=tuple(self._placements),
            columns_used=columns_used,
        ))
        self._placements = []
        self.canvas.showPage()

    def layout_result(self) -> LayoutResult:
        return LayoutResult(
            pages=tuple(self._plans),
            warnings=list(self.warnings),
            question_page_map=dict(self.question_page_map),
            skipped_question_ids=tuple(self.skipped_question_ids),
        )

    # ------------------------------------------------------------------
    # Question pages
    # ------------------------------------------------------------------

    async def _open_question_page(self) -> None:
        if self._page_kinds:
            self._close_page()
        self._enter(BuildStage.NEEDS_NEW_PAGE)

        c = self.canvas
        g = self.geometry
        background = await self.cache.resolve(self.plugin.config)
        if background is not None:
            c.drawImage(background, 0, 0, width=g.page_width, height=g.page_height)
        else:
            c.saveState()
            c.setFillColorRGB(1, 1, 1)
            c.rect(0, 0, g.page_width, g.page_height, stroke=0, fill=1)
            c.restoreState()

        first_page = not self._page_kinds
        self._page_kinds.append(PageKind.QUESTIONS)
        if first_page:
            top = self.plugin.render_header(c, self.metadata, g)
        else:
            top = draw_continuation_header(c, g)

        self._area = open_area(top, self.columns, g)
        self.plugin.render_column_divider(c, self._area, g)
        logger.debug(f"Opened question page {self.page_index + 1} (content top {top:.1f})")
        self._enter(BuildStage.PLACING_QUESTIONS)

    async def _next_slot(self) -> None:
        """Move to the next column, or to a new page after the last column."""
        self._enter(BuildStage.PAGE_FULL)
        advanced = advance_column(self._area)
        if advanced is None:
            await self._open_question_page()
        else:
            self._area = advanced
            self._enter(BuildStage.PLACING_QUESTIONS)

    def _fits_fresh_column(self, question: Question, top: float) -> bool:
        fresh = open_area(top, self.columns, self.geometry)
        return place_question(question, fresh, self.spacing, self.plugin.config.layout, self.geometry) is not None

    def _fits_later(self, question: Question) -> bool:
        """Whether a later column on this page, or an empty continuation page, can hold the question."""
        if not self._area.is_last_column and self._fits_fresh_column(question, self._area.origin_y):
            return True
        return self._fits_fresh_column(question, continuation_content_top(self.geometry))

    async def render_questions(self, questions: Sequence[Question]) -> None:
        """
        Lay out and draw all questions in ascending order.

        A question that does not fit moves to the next column, then to a
        new page. A question that fits neither a later column of the
        current page nor an empty continuation page gets a "too large"
        placeholder instead, so the loop always ends.

        Args:
            questions: Questions in any order (sorted by order here)
        """
        ordered = sorted(questions, key=lambda q: q.order)
        await self._open_question_page()

        for question in ordered:
            await self._render_question(question)

        self._close_page()
        self._enter(BuildStage.ALL_QUESTIONS_PLACED)
        logger.info(f"Placed {len(ordered)} questions on {self.page_count} pages")

    async def _render_question(self, question: Question) -> None:
        layout = self.plugin.config.layout

        while True:
            placed = place_question(question, self._area, self.spacing, layout, self.geometry)
            if placed is not None:
                await self._draw_question(question, placed)
                return
            if not self._fits_later(question):
                if self._placeholder_fits() or self._area.used_height == 0:
                    self._draw_oversized_placeholder(question)
                    return
            await self._next_slot()

    async def _draw_question(self, question: Question, placed: QuestionLayout) -> None:
        c = self.canvas
        self._draw_number(placed.question_number, placed.x, placed.image_top)

        try:
            image = await asyncio.to_thread(embed_image, question.image_data)
        except ImageEmbedError as e:
            message = f"Question {question.id}: image could not be embedded ({e})"
            logger.warning(message)
            self.warnings.append(message)
            self._draw_image_placeholder(placed)
        else:
            c.drawImage(
                image,
                placed.x,
                placed.image_y,
                width=placed.image_width,
                height=placed.image_height,
                mask="auto",
            )

        self.plugin.render_question_box(c, question, placed)
        self._placements.append(placed)
        self.question_page_map[question.id] = self.page_index
        self._area = consume(self._area, placed.height, self.spacing + self.geometry.question_gap)

    def _draw_number(self, number: int, x: float, image_top: float) -> None:
        c = self.canvas
        c.saveState()
        fill(c, INK)
        c.setFont(BOLD_FONT, NUMBER_FONT_SIZE)
        c.drawString(x, image_top + NUMBER_LABEL_RISE, f"{number}.")
        c.restoreState()

    def _draw_image_placeholder(self, placed: QuestionLayout) -> None:
        c = self.canvas
        c.saveState()
        c.setStrokeColorRGB(*PLACEHOLDER_BORDER)
        c.setFillColorRGB(*PLACEHOLDER_FILL)
        c.setLineWidth(1)
        c.rect(placed.x, placed.image_y, placed.image_width, placed.image_height, stroke=1, fill=1)
        c.setFillColorRGB(*PLACEHOLDER_INK)
        c.setFont(FONT, 10)
        c.drawCentredString(
            placed.x + placed.image_width / 2,
            placed.image_y + placed.image_height / 2 - 3,
            IMAGE_UNAVAILABLE_TEXT,
        )
        c.restoreState()

    # ------------------------------------------------------------------
    # Oversized questions
    # ------------------------------------------------------------------

    def _placeholder_fits(self) -> bool:
        needed = OVERSIZED_PLACEHOLDER_HEIGHT + self.geometry.number_reserve + 2 * self.spacing
        return self._area.remaining_height >= needed

    def _draw_oversized_placeholder(self, question: Question) -> None:
        area = self._area
        g = self.geometry
        width = max(50.0, area.column_width - 2 * self.spacing)
        x = area.column_x + (area.column_width - width) / 2
        image_top = area.cursor_y - g.number_strip
        y = image_top - OVERSIZED_PLACEHOLDER_HEIGHT

        w, h = natural_size(question, self.plugin.config.layout.image_scale_boost)
        message = (
            f"Question {question.id} ({w:.0f}x{h:.0f}pt) does not fit on an empty page; "
            f"drew a placeholder"
        )
        logger.warning(message)
        self.warnings.append(message)
        self.skipped_question_ids.append(question.id)

        c = self.canvas
        self._draw_number(question.question_number, x, image_top)
        c.saveState()
        c.setStrokeColorRGB(*PLACEHOLDER_BORDER)
        c.setFillColorRGB(*PLACEHOLDER_FILL)
        c.rect(x, y, width, OVERSIZED_PLACEHOLDER_HEIGHT, stroke=1, fill=1)
        c.setFillColorRGB(*PLACEHOLDER_INK)
        c.setFont(FONT, 9)
        c.drawCentredString(x + width / 2, y + OVERSIZED_PLACEHOLDER_HEIGHT / 2 - 3, "Soru sayfaya sigmiyor")
        c.restoreState()

        self.question_page_map[question.id] = self.page_index
        self._area = consume(
            area,
            OVERSIZED_PLACEHOLDER_HEIGHT + g.number_strip,
            self.spacing + g.question_gap,
        )

    # ------------------------------------------------------------------
    # Answer key, footers, serialization
    # ------------------------------------------------------------------

    def add_answer_key_pages(self, questions: Sequence[Question]) -> int:
        """
        Append answer-key pages after the question pages.

        Returns:
            Number of answer-key pages added
        """
        self._enter(BuildStage.ADDING_ANSWER_KEY)
        chunks = paginate_answer_key(answer_key_entries(questions), self.geometry)
        for i, chunk in enumerate(chunks):
            self._page_kinds.append(PageKind.ANSWER_KEY)
            draw_answer_key_page(self.canvas, chunk, self.geometry, continued=i > 0)
            self._close_page()
        logger.info(f"Added {len(chunks)} answer key page(s)")
        return len(chunks)

    def add_footers_and_watermarks(
        self,
        watermark: PreparedWatermark,
        answer_key_watermark: PreparedWatermark,
    ) -> None:
        """
        Draw footers, then watermarks, on every page.

        Question pages use the theme footer and the resolved watermark;
        answer-key pages use the engine footer and the fainter watermark.
        """
        self._enter(BuildStage.ADDING_FOOTERS)
        g = self.geometry

        def finish_page(c: DeferredPageCanvas, index: int, total: int) -> None:
            if self._page_kinds[index] is PageKind.QUESTIONS:
                self.plugin.render_footer(c, index + 1, total, g)
                self.plugin.render_watermark(c, watermark, g)
            else:
                draw_default_footer(c, index + 1, total, g)
                self.plugin.render_watermark(c, answer_key_watermark, g)

        self.canvas.emit_pages(finish_page)

    def serialize(self) -> None:
        """Write the document to the canvas buffer."""
        self._enter(BuildStage.SERIALIZING)
        self.canvas.save()
        self._enter(BuildStage.DONE)
