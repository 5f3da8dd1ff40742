"""
Module: builder.layout

Purpose:
    Content-area bookkeeping and original-size question placement.

Key Functions:
    - open_area() / advance_column() / consume(): Content-area allocator
    - place_question(): Original-size layout planner

Key Classes:
    - ContentArea: Active content region
    - QuestionLayout: Planned question position
    - PagePlan / LayoutResult: Per-build layout record

Dependencies:
    - core.geometry: Page geometry and unit conversion
    - themes.models: ThemeLayout

Used By:
    - builder.output.renderer: Page state machine
"""

from .models import ContentArea, LayoutResult, PageKind, PagePlan, QuestionLayout
from .allocator import advance_column, consume, open_area
from .planner import natural_size, place_question

__all__ = [
    # Models
    "ContentArea",
    "LayoutResult",
    "PageKind",
    "PagePlan",
    "QuestionLayout",
    # Allocator
    "advance_column",
    "consume",
    "open_area",
    # Planner
    "natural_size",
    "place_question",
]
