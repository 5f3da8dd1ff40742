"""
Module: builder.output.answer_key

Purpose:
    Answer-key generation. Decides whether the key is printed on its
    own page, hidden in the PDF keywords, or omitted, and draws the
    answer grid.

Key Functions:
    - resolve_answer_key_mode(): Page / metadata / none for a build
    - answer_key_entries(): (number, letter) pairs in ascending order
    - paginate_answer_key(): Split entries into page-sized chunks
    - draw_answer_key_page(): Title block and grid of answer cells
    - answer_key_keywords(): "AnswerKey:1:A,2:C,..." for the PDF keywords

Dependencies:
    - reportlab: Canvas drawing
    - core.models: Question, GenerationOptions

Used By:
    - builder.output.renderer: Answer-key pages
    - builder.controller: Mode resolution, hidden key
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.options import GenerationOptions
from booklet_toolkit.core.models.questions import Question
from booklet_toolkit.themes.defaults import BOLD_FONT, FONT, rule
from booklet_toolkit.themes.models import ThemeConfig

logger = logging.getLogger(__name__)

TITLE = "CEVAP ANAHTARI"
TITLE_SIZE = 20
TITLE_BOX_Y = 795.0
SEPARATOR_Y = 780.0

GRID_LEFT = 50.0
GRID_TOP = 750.0
ITEMS_PER_ROW = 10
ITEM_WIDTH = 49.0
ITEM_HEIGHT = 25.0
ROW_STEP = ITEM_HEIGHT + 12
BOX_WIDTH = 46.0
BOX_HEIGHT = 22.0
CELL_FONT_SIZE = 10

KEYWORDS_PREFIX = "AnswerKey:"


class AnswerKeyMode(str, Enum):
    PAGE = "page"
    METADATA = "metadata"
    NONE = "none"


@dataclass(frozen=True)
class AnswerKeyEntry:
    number: int
    letter: str

    @property
    def label(self) -> str:
        return f"{self.number}.{self.letter}"


def resolve_answer_key_mode(options: GenerationOptions, theme: ThemeConfig) -> AnswerKeyMode:
    """
    Decide how the answer key is delivered.

    The explicit option wins, then the theme default. When no page is
    printed, a theme with answer_key_in_metadata hides the key in the
    document keywords. Exactly one mode applies per build.
    """
    include = options.include_answer_key
    if include is None:
        include = theme.include_answer_key
    if include:
        return AnswerKeyMode.PAGE
    if theme.answer_key_in_metadata:
        return AnswerKeyMode.METADATA
    return AnswerKeyMode.NONE


def answer_key_entries(questions: Sequence[Question]) -> List[AnswerKeyEntry]:
    """Entries sorted by question number."""
    return [
        AnswerKeyEntry(number=q.question_number, letter=q.correct_answer.value)
        for q in sorted(questions, key=lambda q: q.order)
    ]


def rows_per_page(geometry: PageGeometry) -> int:
    """Grid rows that fit above the footer reservation."""
    bottom = geometry.footer_space + 20
    return max(1, int((GRID_TOP - bottom) // ROW_STEP) + 1)


def paginate_answer_key(entries: Sequence[AnswerKeyEntry], geometry: PageGeometry) -> List[List[AnswerKeyEntry]]:
    """
    Split entries into pages.

    A single page holds well over a hundred answers; more pages are only
    used for very long booklets. An empty key still gets one page.
    """
    per_page = rows_per_page(geometry) * ITEMS_PER_ROW
    chunks = [list(entries[i:i + per_page]) for i in range(0, len(entries), per_page)]
    return chunks or [[]]


def _draw_title(c: Canvas, geometry: PageGeometry, continued: bool) -> None:
    title = f"{TITLE} (devam)" if continued else TITLE
    title_width = c.stringWidth(title, BOLD_FONT, TITLE_SIZE)
    box_x = (geometry.page_width - title_width) / 2 - 20

    c.saveState()
    c.setFillColorRGB(0.95, 0.95, 0.95)
    c.setStrokeColorRGB(0.7, 0.7, 0.7)
    c.setLineWidth(1)
    c.rect(box_x, TITLE_BOX_Y, title_width + 40, 30, stroke=1, fill=1)
    c.setFillColorRGB(1, 1, 1)
    c.rect(box_x + 1, TITLE_BOX_Y + 28, title_width + 38, 1, stroke=0, fill=1)
    c.setFillColorRGB(0.15, 0.15, 0.15)
    c.setFont(BOLD_FONT, TITLE_SIZE)
    c.drawCentredString(geometry.page_width / 2, TITLE_BOX_Y + 9, title)
    c.restoreState()

    rule(c, GRID_LEFT, SEPARATOR_Y, geometry.page_width - GRID_LEFT, (0.5, 0.5, 0.5), width=1.5)
    rule(c, GRID_LEFT, SEPARATOR_Y + 1, geometry.page_width - GRID_LEFT, (0.8, 0.8, 0.8), width=0.3)


def _draw_cell(c: Canvas, entry: AnswerKeyEntry, x: float, y: float) -> None:
    c.saveState()
    # Two shadow layers, then the bordered box
    c.setFillColorRGB(0.8, 0.8, 0.8)
    c.rect(x + 2, y - 4, BOX_WIDTH, BOX_HEIGHT, stroke=0, fill=1)
    c.setFillColorRGB(0.9, 0.9, 0.9)
    c.rect(x + 1, y - 2, BOX_WIDTH, BOX_HEIGHT, stroke=0, fill=1)
    c.setFillColorRGB(0.98, 0.98, 0.98)
    c.setStrokeColorRGB(0.6, 0.6, 0.6)
    c.setLineWidth(0.8)
    c.rect(x, y, BOX_WIDTH, BOX_HEIGHT, stroke=1, fill=1)
    c.setFillColorRGB(1, 1, 1)
    c.rect(x + 1, y + BOX_HEIGHT - 2, BOX_WIDTH - 2, 1, stroke=0, fill=1)

    c.setFillColorRGB(0.1, 0.1, 0.1)
    c.setFont(FONT, CELL_FONT_SIZE)
    c.drawCentredString(x + BOX_WIDTH / 2, y + 6, entry.label)
    c.restoreState()


def draw_answer_key_page(
    c: Canvas,
    entries: Sequence[AnswerKeyEntry],
    geometry: PageGeometry,
    *,
    continued: bool = False,
) -> None:
    """
    Draw one answer-key page: title block and a grid of answer cells,
    ten per row, left to right and top to bottom.

    Args:
        c: ReportLab canvas (current page must be empty)
        entries: Entries for this page, ascending
        geometry: Page geometry
        continued: Whether this page continues a previous key page
    """
    _draw_title(c, geometry, continued)

    for index, entry in enumerate(entries):
        row, col = divmod(index, ITEMS_PER_ROW)
        _draw_cell(c, entry, GRID_LEFT + col * ITEM_WIDTH, GRID_TOP - row * ROW_STEP)

    logger.debug(f"Answer key page with {len(entries)} cells")


def answer_key_keywords(questions: Sequence[Question]) -> str:
    """
    Hidden answer key for the document keywords.

    Example:
        >>> answer_key_keywords(questions)
        'AnswerKey:1:A,2:C,3:B'
    """
    pairs = ",".join(f"{e.number}:{e.letter}" for e in answer_key_entries(questions))
    return f"{KEYWORDS_PREFIX}{pairs}"
