"""
Module: themes.defaults

Purpose:
    Engine default drawing used wherever a theme leaves a hook unset,
    plus the continuation header printed on every page after the first.

Key Functions:
    - draw_default_header(): Single-line metadata strip with divider
    - draw_continuation_header(): "Test (devam)" strip for later pages
    - draw_default_footer(): Right-aligned page number
    - draw_no_question_box() / draw_no_column_divider(): No-op hooks

Dependencies:
    - reportlab: Canvas drawing
    - core.geometry: PageGeometry

Used By:
    - themes.plugin: Hook defaults
    - builder.output.renderer: Continuation header, answer-key footer
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.models.options import Rgb
from booklet_toolkit.core.utils.text import sanitize_text

if TYPE_CHECKING:
    from booklet_toolkit.builder.layout.models import ContentArea, QuestionLayout
    from booklet_toolkit.core.models.questions import Question

FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

INK: Rgb = (0.067, 0.067, 0.067)
FOOTER_INK: Rgb = (0.2, 0.2, 0.2)
RULE_GREY: Rgb = (0.9, 0.9, 0.9)

HEADER_FONT_SIZE = 12
FOOTER_FONT_SIZE = 10
FOOTER_BASELINE = 45.0
STRIP_SEPARATOR = " • "
CONTINUATION_TITLE = "Test (devam)"


def fill(c: Canvas, color: Rgb) -> None:
    """Set the fill colour from an RGB triple."""
    c.setFillColorRGB(*color)


def stroke(c: Canvas, color: Rgb) -> None:
    """Set the stroke colour from an RGB triple."""
    c.setStrokeColorRGB(*color)


def rule(c: Canvas, x1: float, y: float, x2: float, color: Rgb, width: float = 0.5) -> None:
    """Draw a horizontal rule."""
    c.saveState()
    stroke(c, color)
    c.setLineWidth(width)
    c.line(x1, y, x2, y)
    c.restoreState()


def join_present(parts: Iterable[Optional[str]], separator: str = STRIP_SEPARATOR) -> str:
    """Join the non-empty parts after sanitising each of them."""
    return separator.join(p for p in (sanitize_text(x) for x in parts) if p)


def metadata_strip(metadata: ThemedMetadata) -> str:
    """
    One-line metadata summary: test, course, class, teacher and date.

    Example:
        >>> metadata_strip(themed)  # doctest: +SKIP
        'Deneme 1 • Matematik • 9-A • Ayse Yilmaz • 01.05.2024'
    """
    return join_present([
        metadata.test_name,
        metadata.course_name,
        metadata.class_name,
        metadata.teacher_name,
        metadata.date_label,
    ])


def draw_default_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    """
    Draw the generic first-page header.

    Returns:
        Y coordinate where page content starts
    """
    left = geometry.margin_left + 36
    right = geometry.page_width - left
    y = geometry.header_top

    c.saveState()
    fill(c, INK)
    c.setFont(FONT, HEADER_FONT_SIZE)
    c.drawString(left, y, metadata_strip(metadata))
    c.restoreState()

    y -= 30
    rule(c, left, y, right, RULE_GREY)
    return y - 20


def continuation_content_top(geometry: PageGeometry) -> float:
    """Y coordinate where content starts below the continuation header."""
    return geometry.header_top - 55


def draw_continuation_header(c: Canvas, geometry: PageGeometry) -> float:
    """
    Draw the minimal header used on pages after the first.

    Returns:
        Y coordinate where page content starts
    """
    left = geometry.margin_left + 36
    right = geometry.page_width - left
    y = geometry.header_top - 20

    c.saveState()
    fill(c, INK)
    c.setFont(FONT, HEADER_FONT_SIZE)
    c.drawString(left, y, CONTINUATION_TITLE)
    c.restoreState()

    rule(c, left, y - 15, right, RULE_GREY)
    return continuation_content_top(geometry)


def draw_default_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    """Draw a right-aligned page number."""
    c.saveState()
    fill(c, FOOTER_INK)
    c.setFont(FONT, FOOTER_FONT_SIZE)
    c.drawRightString(geometry.page_width - geometry.margin_left - 36, FOOTER_BASELINE, str(page_number))
    c.restoreState()


def draw_no_question_box(c: Canvas, question: "Question", layout: "QuestionLayout") -> None:
    """Themes without question decoration draw nothing."""


def draw_no_column_divider(c: Canvas, area: "ContentArea", geometry: PageGeometry) -> None:
    """Themes without a divider draw nothing."""
