"""
Module: themes.yks_2025

Purpose:
    University entrance practice exam theme: centred title over the
    artwork banner, course/class/exam-code line, student name and
    number blanks, ruled "Sayfa n / m" footer, "YKS 2025" watermark.
"""

from __future__ import annotations

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.models.options import WatermarkKind, WatermarkSpec
from booklet_toolkit.core.utils.text import sanitize_text

from .defaults import BOLD_FONT, FONT, fill, join_present, rule
from .models import ThemeColors, ThemeConfig, ThemeFields, ThemeLayout
from .plugin import ThemePlugin

CONFIG = ThemeConfig(
    id="yks-2025",
    name="YKS 2025",
    description="Modern layout for YKS 2025 practice exams",
    colors=ThemeColors(
        primary=(0.12, 0.12, 0.12),
        secondary=(0.35, 0.35, 0.35),
        accent=(0.83, 0.33, 0.36),
        background=(1.0, 1.0, 1.0),
        text=(0.12, 0.12, 0.12),
        border=(0.78, 0.78, 0.78),
    ),
    layout=ThemeLayout(
        columns=2,
        question_spacing=18,
        border_style="subtle",
        question_box_style="minimal",
        header_style="minimal",
        footer_style="minimal",
        show_column_divider=False,
    ),
    fields=ThemeFields(student_name=True, student_number=True, exam_code=True),
    default_watermark=WatermarkSpec(
        kind=WatermarkKind.TEXT,
        content="YKS 2025",
        opacity=0.08,
        size=52,
        rotation_degrees=-30,
        color=(0.75, 0.75, 0.75),
    ),
    background_path="/themes/test03-1.png",
    include_answer_key=True,
)

SIDE = 40.0


def render_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    colors = CONFIG.colors
    center = geometry.page_width / 2
    y = 780.0

    c.saveState()
    fill(c, colors.primary)
    c.setFont(BOLD_FONT, 16)
    c.drawCentredString(center, y - 20, sanitize_text(metadata.test_name) or "YKS 2025 DENEMESI")
    y -= 40

    code = f"Kod: {metadata.exam_code}" if metadata.exam_code and CONFIG.fields.exam_code else None
    info = join_present([metadata.course_name, metadata.class_name, code])
    if info:
        fill(c, colors.secondary)
        c.setFont(FONT, 14)
        c.drawCentredString(center, y, info)
        y -= 20

    fill(c, colors.text)
    c.setFont(FONT, 10)
    if CONFIG.fields.student_name:
        c.drawString(50, y, "Ad Soyad: ____________")
        y -= 15
    if CONFIG.fields.student_number:
        c.drawString(50, y, "Ogrenci No: _________")
        y -= 16
    c.restoreState()

    rule(c, SIDE, y, geometry.page_width - SIDE, colors.border, width=0.8)
    return y - 25


def render_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    footer_y = 60.0
    rule(c, SIDE, footer_y + 18, geometry.page_width - SIDE, CONFIG.colors.border, width=0.8)
    c.saveState()
    fill(c, CONFIG.colors.secondary)
    c.setFont(FONT, 10)
    c.drawCentredString(geometry.page_width / 2, footer_y, f"Sayfa {page_number} / {total_pages}")
    c.restoreState()


PLUGIN = ThemePlugin(
    config=CONFIG,
    render_header=render_header,
    render_footer=render_footer,
)
