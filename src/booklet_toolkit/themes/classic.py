"""
Module: themes.classic

Purpose:
    Classic/Minimal theme: turquoise accents, titled header with boxed
    class/course and teacher/date panels, turquoise column divider and
    boxed page number. Default theme of the registry.

Key Objects:
    - CONFIG: Theme configuration
    - PLUGIN: Theme plugin
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.utils.text import sanitize_text

from .defaults import BOLD_FONT, FONT, fill, rule, stroke
from .models import ThemeColors, ThemeConfig, ThemeLayout
from .plugin import ThemePlugin

if TYPE_CHECKING:
    from booklet_toolkit.builder.layout.models import ContentArea

TURQUOISE = (0.0, 0.75, 0.8)

CONFIG = ThemeConfig(
    id="classic",
    name="Classic/Minimal",
    description="Clean and professional design with turquoise accents, perfect for standard tests",
    colors=ThemeColors(
        primary=TURQUOISE,
        secondary=(0.0, 0.6, 0.65),
        accent=(0.0, 0.9, 0.95),
        background=(1.0, 1.0, 1.0),
        text=(0.1, 0.1, 0.1),
        border=TURQUOISE,
    ),
    layout=ThemeLayout(
        columns=2,
        question_spacing=5,
        border_style="subtle",
        question_box_style="minimal",
        header_style="standard",
        footer_style="minimal",
        show_column_divider=True,
    ),
    include_answer_key=True,
    answer_key_in_metadata=False,
)

TITLE_SIZE = 18
BODY_SIZE = 11
LINE_STEP = 18
PANEL_WIDTH = 240
DIVIDER_BOTTOM = 85.0


def render_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    colors = CONFIG.colors
    y = 800.0

    title = sanitize_text(metadata.test_name)
    if title:
        title_width = c.stringWidth(title, BOLD_FONT, TITLE_SIZE)
        box_width = title_width + 40
        c.saveState()
        fill(c, colors.primary)
        stroke(c, colors.border)
        c.setLineWidth(2)
        c.rect((geometry.page_width - box_width) / 2, y - 5, box_width, 30, stroke=1, fill=1)
        fill(c, (1.0, 1.0, 1.0))
        c.setFont(BOLD_FONT, TITLE_SIZE)
        c.drawCentredString(geometry.page_width / 2, y + 5, title)
        c.restoreState()
        y -= 45

    left_lines = []
    if metadata.class_name:
        left_lines.append(f"Sinif: {sanitize_text(metadata.class_name)}")
    if metadata.course_name:
        left_lines.append(f"Ders: {sanitize_text(metadata.course_name)}")
    right_lines = []
    if metadata.teacher_name:
        right_lines.append(f"Ogretmen: {sanitize_text(metadata.teacher_name)}")
    right_lines.append(f"Tarih: {metadata.date_label}")

    panel_height = max(len(left_lines), len(right_lines)) * LINE_STEP
    for x, lines in ((45, left_lines), (310, right_lines)):
        if not lines:
            continue
        c.saveState()
        stroke(c, colors.border)
        fill(c, (1.0, 1.0, 1.0))
        c.setLineWidth(2)
        c.rect(x, y - panel_height - 5, PANEL_WIDTH, panel_height + 10, stroke=1, fill=1)
        fill(c, colors.text)
        c.setFont(FONT, BODY_SIZE)
        line_y = y - 10
        for line in lines:
            c.drawString(x + 10, line_y, line)
            line_y -= LINE_STEP
        c.restoreState()

    divider_y = y - panel_height - 25
    rule(c, 50, divider_y, geometry.page_width - 50, colors.border, width=2)
    return divider_y - 20


def render_column_divider(c: Canvas, area: "ContentArea", geometry: PageGeometry) -> None:
    if area.max_columns < 2:
        return
    x = area.origin_x + area.column_width + area.column_gap / 2
    c.saveState()
    stroke(c, CONFIG.colors.border)
    c.setLineWidth(2)
    c.line(x, area.origin_y - 5, x, DIVIDER_BOTTOM)
    c.restoreState()


def render_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    text = str(page_number)
    text_width = c.stringWidth(text, FONT, 10)
    text_x = 535 - text_width
    c.saveState()
    stroke(c, CONFIG.colors.border)
    fill(c, (1.0, 1.0, 1.0))
    c.setLineWidth(2)
    c.rect(text_x - 10, 40, text_width + 20, 20, stroke=1, fill=1)
    fill(c, CONFIG.colors.text)
    c.setFont(FONT, 10)
    c.drawString(text_x, 45, text)
    c.restoreState()


PLUGIN = ThemePlugin(
    config=CONFIG,
    render_header=render_header,
    render_footer=render_footer,
    render_column_divider=render_column_divider,
)
