"""
Module: builder.layout.models

Purpose:
    Data models for booklet layout.
    Immutable dataclasses for the active content area, planned question
    positions, and the per-build layout record.

Key Classes:
    - ContentArea: Usable region of the current page and column cursor
    - QuestionLayout: Where and how large one question is drawn
    - PagePlan: Questions placed on one page
    - LayoutResult: All pages with diagnostics

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.allocator: Creates/advances ContentAreas
    - builder.layout.planner: Creates QuestionLayouts
    - builder.output.renderer: Records PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ContentArea:
    """
    Usable content region of a page (immutable).

    Coordinates are PDF points with a bottom-left origin; origin_y is the
    top edge of the area. Operations in builder.layout.allocator return
    new instances; callers rebind.

    Attributes:
        origin_x: Left edge of the first column
        origin_y: Top edge of the area
        width: Total width across all columns
        height: Usable height of a column
        remaining_height: Height still free in the current column
        current_column: Zero-based active column
        max_columns: Column count
        column_width: Width of one column
        column_gap: Gap between columns (the divider)

    Example:
        >>> area = open_area(700, 2)
        >>> area.used_height
        0.0
    """

    origin_x: float
    origin_y: float
    width: float
    height: float
    remaining_height: float
    current_column: int
    max_columns: int
    column_width: float
    column_gap: float

    @property
    def used_height(self) -> float:
        """Height consumed in the current column."""
        return self.height - self.remaining_height

    @property
    def column_x(self) -> float:
        """Left edge of the current column."""
        return self.origin_x + self.current_column * (self.column_width + self.column_gap)

    @property
    def cursor_y(self) -> float:
        """Y coordinate of the next free line in the current column."""
        return self.origin_y - self.used_height

    @property
    def is_last_column(self) -> bool:
        return self.current_column >= self.max_columns - 1


@dataclass(frozen=True)
class QuestionLayout:
    """
    Planned position of one question (immutable, transient).

    The block stacks, top to bottom: the number strip, the image, and
    the answer area a theme may reserve.

    Attributes:
        question_id: Question identifier
        question_number: Printed number (order + 1)
        x: Left edge of the image
        y: Bottom edge of the whole block
        width: Image width in points
        height: Block height (number strip + image + answer area)
        image_width: Drawn image width (equals width)
        image_height: Drawn image height
        answer_area_height: Space reserved under the image
        column: Column the block sits in
        original_pixel_width: Source raster width
        original_pixel_height: Source raster height
        scale_factor: Always 1.0 (images are never shrunk)
        image_scale_boost: Theme boost applied to the natural size
    """

    question_id: str
    question_number: int
    x: float
    y: float
    width: float
    height: float
    image_width: float
    image_height: float
    column: int
    original_pixel_width: int
    original_pixel_height: int
    answer_area_height: float = 0.0
    scale_factor: float = 1.0
    image_scale_boost: float = 1.0

    @property
    def top(self) -> float:
        """Top edge of the block."""
        return self.y + self.height

    @property
    def image_y(self) -> float:
        """Bottom edge of the image."""
        return self.y + self.answer_area_height

    @property
    def image_top(self) -> float:
        return self.image_y + self.image_height


class PageKind(str, Enum):
    QUESTIONS = "questions"
    ANSWER_KEY = "answer_key"


@dataclass(frozen=True)
class PagePlan:
    """
    Questions placed on a single page.

    Attributes:
        index: Page number (0-indexed)
        kind: Question page or answer-key page
        placements: QuestionLayouts drawn on this page, in print order
        columns_used: Number of columns that received at least one question

    Example:
        >>> page = PagePlan(index=0, kind=PageKind.QUESTIONS, placements=(l1, l2))
        >>> page.placement_count
        2
    """

    index: int
    kind: PageKind
    placements: tuple[QuestionLayout, ...] = ()
    columns_used: int = 0

    @property
    def placement_count(self) -> int:
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout record with diagnostics.

    Attributes:
        pages: Tuple of PagePlans (question pages then answer-key pages)
        warnings: Warning messages (oversized questions, asset fallbacks)
        question_page_map: Mapping of question_id to page index
        skipped_question_ids: Questions replaced by a "too large" placeholder
    """

    pages: tuple[PagePlan, ...]
    warnings: list[str] = field(default_factory=list)
    question_page_map: dict[str, int] = field(default_factory=dict)
    skipped_question_ids: tuple[str, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def question_page_count(self) -> int:
        return sum(1 for p in self.pages if p.kind is PageKind.QUESTIONS)

    @property
    def total_placements(self) -> int:
        return sum(p.placement_count for p in self.pages)
