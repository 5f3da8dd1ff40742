"""
Module: builder.layout.allocator

Purpose:
    Content-area bookkeeping: open the usable region below a header,
    move to the next column, and consume height after a placement.
    Pure functions over immutable ContentArea values.

Key Functions:
    - open_area(): Content area for a fresh page
    - advance_column(): Next column, or None when the page is full
    - consume(): Area after placing a block

Dependencies:
    - core.geometry: PageGeometry
    - builder.layout.models: ContentArea

Used By:
    - builder.output.renderer: Page state machine
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from booklet_toolkit.core.geometry import PageGeometry

from .models import ContentArea

logger = logging.getLogger(__name__)

_DEFAULT_GEOMETRY = PageGeometry()


def open_area(
    page_top_y: float,
    column_count: int,
    geometry: PageGeometry = _DEFAULT_GEOMETRY,
) -> ContentArea:
    """
    Compute the usable content area below a header.

    Args:
        page_top_y: Y coordinate where content starts (returned by the header)
        column_count: Requested columns; values below 1 are clamped to 1
        geometry: Page geometry

    Returns:
        ContentArea positioned at the left margin with a full first column

    Example:
        >>> area = open_area(700, 2)
        >>> area.height
        650.0
        >>> round(area.column_width, 2)
        282.83
    """
    columns = max(1, int(column_count))
    available_width = geometry.available_width
    available_height = max(geometry.min_content_height, page_top_y - geometry.footer_space)
    if available_height > page_top_y - geometry.footer_space:
        logger.debug(
            f"Header left {page_top_y - geometry.footer_space:.1f}pt; "
            f"clamped content height to {available_height:.1f}pt"
        )

    gap = geometry.divider_width if columns > 1 else 0.0
    column_width = (available_width - gap * (columns - 1)) / columns

    return ContentArea(
        origin_x=geometry.margin_left,
        origin_y=page_top_y,
        width=available_width,
        height=float(available_height),
        remaining_height=float(available_height),
        current_column=0,
        max_columns=columns,
        column_width=column_width,
        column_gap=gap,
    )


def advance_column(area: ContentArea) -> Optional[ContentArea]:
    """
    Move to the next column.

    Returns:
        A new area on the next column with full height, or None when the
        current column is the last one (a new page is needed)
    """
    if area.is_last_column:
        return None
    return replace(area, current_column=area.current_column + 1, remaining_height=area.height)


def consume(area: ContentArea, used_height: float, spacing: float) -> ContentArea:
    """
    Record that a block of used_height (plus spacing) was placed.

    The input area is never mutated. remaining_height may go negative;
    the planner then rejects any further block in this column.
    """
    return replace(area, remaining_height=area.remaining_height - (used_height + spacing))
