"""
Module: themes.deneme_sinavi

Purpose:
    Practice exam ("deneme sinavi") theme: ruled header with test name,
    term and month on the first line and the course below it, ruled
    footer with a centred page number, "DENEME" watermark.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.models.options import WatermarkKind, WatermarkSpec
from booklet_toolkit.core.utils.text import sanitize_text

from .defaults import BOLD_FONT, FONT, fill, join_present, rule, stroke
from .models import ThemeColors, ThemeConfig, ThemeLayout
from .plugin import ThemePlugin

if TYPE_CHECKING:
    from booklet_toolkit.builder.layout.models import ContentArea

CONFIG = ThemeConfig(
    id="deneme-sinavi",
    name="Deneme Sinavi",
    description="Practice exam layout with ruled header and footer",
    colors=ThemeColors(
        primary=(0.11, 0.11, 0.11),
        secondary=(0.45, 0.45, 0.45),
        accent=(0.8, 0.8, 0.8),
        background=(1.0, 1.0, 1.0),
        text=(0.11, 0.11, 0.11),
        border=(0.8, 0.8, 0.8),
    ),
    layout=ThemeLayout(
        columns=2,
        question_spacing=20,
        border_style="subtle",
        question_box_style="none",
        header_style="standard",
        footer_style="standard",
        show_column_divider=False,
    ),
    default_watermark=WatermarkSpec(
        kind=WatermarkKind.TEXT,
        content="DENEME",
        opacity=0.08,
        size=60,
        rotation_degrees=-30,
        color=(0.8, 0.8, 0.8),
    ),
    background_path="/themes/test-03.png",
    background_fallbacks=("/themes/test-03.png",),
    include_answer_key=True,
)

MONTHS = (
    "OCAK", "SUBAT", "MART", "NISAN", "MAYIS", "HAZIRAN",
    "TEMMUZ", "AGUSTOS", "EYLUL", "EKIM", "KASIM", "ARALIK",
)

RULE_LEFT = 30.0
FOOTER_RULE_Y = 70.0
FOOTER_BASELINE = 50.0
DIVIDER_BOTTOM = 80.0


def render_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    colors = CONFIG.colors
    right = geometry.page_width - RULE_LEFT
    y = 810.0
    rule(c, RULE_LEFT, y, right, colors.border, width=1)
    y -= 26

    test_name = sanitize_text(metadata.test_name) or "Deneme Sinavi"
    course = sanitize_text(metadata.course_name).upper() or "DERS"
    month = MONTHS[metadata.issued_on.month - 1]

    c.saveState()
    fill(c, colors.primary)
    c.setFont(BOLD_FONT, 14)
    c.drawString(RULE_LEFT, y, test_name)
    cursor = RULE_LEFT + c.stringWidth(test_name, BOLD_FONT, 14) + 8

    term_line = join_present([metadata.term, month], " ")
    fill(c, colors.secondary)
    c.setFont(FONT, 12)
    c.drawString(cursor, y, f"- {term_line}")

    y -= 24
    fill(c, colors.primary)
    c.drawString(RULE_LEFT, y, course)
    c.restoreState()

    y -= 30
    rule(c, RULE_LEFT, y, right, colors.border, width=1)
    return y - 30


def render_column_divider(c: Canvas, area: "ContentArea", geometry: PageGeometry) -> None:
    if not CONFIG.layout.show_column_divider or area.max_columns < 2:
        return
    x = area.origin_x + area.column_width + area.column_gap / 2
    c.saveState()
    stroke(c, CONFIG.colors.border)
    c.setLineWidth(1)
    c.line(x, area.origin_y - 5, x, DIVIDER_BOTTOM)
    c.restoreState()


def render_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    rule(c, RULE_LEFT, FOOTER_RULE_Y, geometry.page_width - RULE_LEFT, CONFIG.colors.border, width=1)
    c.saveState()
    fill(c, CONFIG.colors.secondary)
    c.setFont(FONT, 11)
    c.drawCentredString(geometry.page_width / 2, FOOTER_BASELINE, str(page_number))
    c.restoreState()


PLUGIN = ThemePlugin(
    config=CONFIG,
    render_header=render_header,
    render_footer=render_footer,
    render_column_divider=render_column_divider,
)
