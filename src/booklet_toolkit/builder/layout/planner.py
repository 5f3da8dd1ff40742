"""
Module: builder.layout.planner

Purpose:
    Original-size layout planning. Decides whether a question fits in
    the active column at its natural printed size and where it goes.
    Images are never shrunk: a question that does not fit returns None,
    which tells the caller to move to the next column or page.

Key Functions:
    - natural_size(): Printed size of a question in points
    - place_question(): QuestionLayout for the active column, or None

Dependencies:
    - core.geometry: px_to_pt, PageGeometry
    - themes.models: ThemeLayout (boost, gutter offsets, answer area)

Used By:
    - builder.output.renderer: Page state machine
"""

from __future__ import annotations

import logging
from typing import Optional

from booklet_toolkit.core.geometry import PageGeometry, px_to_pt
from booklet_toolkit.core.models.questions import Question
from booklet_toolkit.themes.models import ThemeLayout

from .models import ContentArea, QuestionLayout

logger = logging.getLogger(__name__)

# Side of the square used for questions with unusable pixel sizes
FALLBACK_BOX_PT = 100.0

_DEFAULT_GEOMETRY = PageGeometry()
_DEFAULT_LAYOUT = ThemeLayout()


def natural_size(question: Question, image_scale_boost: float = 1.0) -> tuple[float, float]:
    """
    Printed size of a question image in points.

    Pixels are converted at 300 DPI and multiplied by the theme boost.

    Example:
        >>> natural_size(q_1200x600)
        (288.0, 144.0)
        >>> natural_size(q_1200x600, 1.3)
        (374.4, 187.2)
    """
    return (
        px_to_pt(question.actual_width) * image_scale_boost,
        px_to_pt(question.actual_height) * image_scale_boost,
    )


def place_question(
    question: Question,
    area: ContentArea,
    spacing: float,
    layout: ThemeLayout = _DEFAULT_LAYOUT,
    geometry: PageGeometry = _DEFAULT_GEOMETRY,
) -> Optional[QuestionLayout]:
    """
    Plan a question in the active column of an area.

    Fit test: the boosted image (plus any answer area the theme
    reserves) must fit within the column width minus 2*spacing and the
    remaining height minus the number reserve and 2*spacing.

    Args:
        question: Question to place
        area: Active content area
        spacing: Question spacing in points
        layout: Theme layout parameters
        geometry: Page geometry

    Returns:
        QuestionLayout with scale_factor 1.0, or None when the question
        does not fit (route to next column/page; never a failure)

    Example:
        >>> area = open_area(700, 2)
        >>> placed = place_question(q_1200x600, area, spacing=5)
        >>> (placed.width, placed.height)
        (288.0, 159.0)
    """
    max_width = area.column_width - 2 * spacing
    max_height = area.remaining_height - geometry.number_reserve - 2 * spacing
    if max_width <= 0 or max_height <= 0:
        return None

    if question.has_valid_size:
        width, height = natural_size(question, layout.image_scale_boost)
    else:
        width = min(FALLBACK_BOX_PT, max_width)
        height = min(FALLBACK_BOX_PT, max_height)
        logger.warning(
            f"Question {question.id} has invalid size "
            f"{question.actual_width}x{question.actual_height}px; using {width:.0f}x{height:.0f}pt box"
        )

    if width > max_width or height + layout.answer_area_height > max_height:
        logger.debug(
            f"Question {question.id} ({width:.1f}x{height:.1f}pt) does not fit "
            f"column {area.current_column} ({max_width:.1f}x{max_height:.1f}pt free)"
        )
        return None

    block_height = geometry.number_strip + height + layout.answer_area_height
    column_x = area.column_x

    # Hug the gutter: first column leans right, later columns lean left
    if area.max_columns > 1 and area.current_column == 0:
        x = column_x + area.column_width - width - layout.inner_pad
    else:
        x = column_x + layout.inner_pad
    x += layout.image_offset_x
    x = min(max(x, column_x), column_x + area.column_width - width)

    return QuestionLayout(
        question_id=question.id,
        question_number=question.question_number,
        x=x,
        y=area.cursor_y - block_height,
        width=width,
        height=block_height,
        image_width=width,
        image_height=height,
        column=area.current_column,
        original_pixel_width=question.actual_width,
        original_pixel_height=question.actual_height,
        answer_area_height=layout.answer_area_height,
        scale_factor=1.0,
        image_scale_boost=layout.image_scale_boost,
    )
