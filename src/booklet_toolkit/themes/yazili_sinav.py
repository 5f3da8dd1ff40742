"""
Module: themes.yazili_sinav

Purpose:
    Formal written exam ("yazili sinav") theme. Single column with a
    1.3x image boost, framed header with school, title and a student
    information section, a ruled answer area under every question and
    a "Sayfa n / m" footer. No answer-key page is printed; the key is
    stored in the document keywords for the teacher instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.utils.text import sanitize_text

from .defaults import BOLD_FONT, FONT, fill, rule, stroke
from .models import ThemeColors, ThemeConfig, ThemeFields, ThemeLayout
from .plugin import ThemePlugin

if TYPE_CHECKING:
    from booklet_toolkit.builder.layout.models import QuestionLayout
    from booklet_toolkit.core.models.questions import Question

ANSWER_AREA_HEIGHT = 40.0
ANSWER_AREA_GAP = 10.0
ANSWER_LINE_SPACING = 8.0
ANSWER_AREA_FILL = (0.98, 0.98, 0.98)
ANSWER_LINE_COLOR = (0.8, 0.8, 0.8)

INSTRUCTION = "* Tum sorulari dikkatli okuyunuz ve cevaplarinizi net bir sekilde isaretleyiniz."

CONFIG = ThemeConfig(
    id="yazili-sinav",
    name="Yazili Sinav",
    description="Formal exam theme with school information, student details and signature area",
    colors=ThemeColors(
        primary=(0.2, 0.2, 0.2),
        secondary=(0.4, 0.4, 0.4),
        accent=(0.6, 0.6, 0.6),
        background=(1.0, 1.0, 1.0),
        text=(0.1, 0.1, 0.1),
        border=(0.3, 0.3, 0.3),
    ),
    layout=ThemeLayout(
        columns=1,
        question_spacing=10,
        border_style="bold",
        question_box_style="classic",
        header_style="detailed",
        footer_style="standard",
        show_column_divider=False,
        image_scale_boost=1.3,
        answer_area_height=ANSWER_AREA_HEIGHT + ANSWER_AREA_GAP,
    ),
    fields=ThemeFields(
        school_name=True,
        student_name=True,
        student_number=True,
        signature=True,
    ),
    background_path="/themes/test-05.png",
    background_fallbacks=("/themes/test-05.png",),
    include_answer_key=False,
    answer_key_in_metadata=True,
)


def render_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    colors = CONFIG.colors
    center = geometry.page_width / 2
    y = 820.0

    c.saveState()
    stroke(c, colors.border)
    c.setLineWidth(2)
    c.rect(30, y - 5, geometry.page_width - 60, -120, stroke=1, fill=0)
    c.restoreState()

    c.saveState()
    fill(c, colors.primary)
    school = sanitize_text(metadata.school_name)
    if school and CONFIG.fields.school_name:
        c.setFont(BOLD_FONT, 14)
        c.drawCentredString(center, y - 20, school)
        y -= 30

    title = sanitize_text(metadata.test_name)
    if title:
        c.setFont(BOLD_FONT, 18)
        c.drawCentredString(center, y - 20, title)
        y -= 35

    fill(c, colors.secondary)
    c.setFont(FONT, 12)
    for label, value in (
        ("Ders", metadata.course_name),
        ("Sinif", metadata.class_name),
        ("Ogretmen", metadata.teacher_name),
    ):
        if value:
            c.drawCentredString(center, y - 20, f"{label}: {sanitize_text(value)}")
            y -= 20
    c.restoreState()

    y -= 30
    _render_student_section(c, metadata, y, geometry)
    return y - 100


def _render_student_section(c: Canvas, metadata: ThemedMetadata, top: float, geometry: PageGeometry) -> None:
    colors = CONFIG.colors
    c.saveState()
    stroke(c, colors.border)
    c.setLineWidth(1.5)
    c.rect(50, top - 80, geometry.page_width - 100, 80, stroke=1, fill=0)

    fill(c, colors.primary)
    c.setFont(BOLD_FONT, 10)
    c.drawString(60, top - 15, "OGRENCI BILGILERI")

    c.setFont(FONT, 10)
    fields = [
        ("Ad Soyad:", metadata.student_name, top - 35, CONFIG.fields.student_name),
        ("Ogrenci No:", metadata.student_number, top - 55, CONFIG.fields.student_number),
    ]
    for label, value, line_y, visible in fields:
        if not visible:
            continue
        fill(c, colors.text)
        c.drawString(60, line_y, label)
        stroke(c, colors.border)
        c.setLineWidth(0.5)
        c.line(120, line_y - 2, 350, line_y - 2)
        if value:
            c.drawString(125, line_y, sanitize_text(value))

    fill(c, colors.text)
    c.drawString(370, top - 35, f"Tarih: {metadata.date_label}")
    if CONFIG.fields.signature:
        c.drawString(370, top - 55, "Imza:")
        c.line(400, top - 57, 530, top - 57)
    c.restoreState()


def render_question_box(c: Canvas, question: "Question", layout: "QuestionLayout") -> None:
    """Ruled answer area in the space reserved under the question."""
    top = layout.y + ANSWER_AREA_HEIGHT
    c.saveState()
    fill(c, ANSWER_AREA_FILL)
    stroke(c, CONFIG.colors.border)
    c.setLineWidth(0.5)
    c.rect(layout.x, layout.y, layout.width, ANSWER_AREA_HEIGHT, stroke=1, fill=1)

    fill(c, CONFIG.colors.text)
    c.setFont(FONT, 8)
    c.drawString(layout.x + 5, top - 12, "YANIT ALANI:")

    stroke(c, ANSWER_LINE_COLOR)
    c.setLineWidth(0.3)
    line_count = int((ANSWER_AREA_HEIGHT - 15) // ANSWER_LINE_SPACING)
    for i in range(line_count):
        line_y = top - 20 - i * ANSWER_LINE_SPACING
        c.line(layout.x + 5, line_y, layout.x + layout.width - 5, line_y)
    c.restoreState()


def render_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    colors = CONFIG.colors
    rule(c, 50, 60, geometry.page_width - 50, colors.border, width=1)
    c.saveState()
    fill(c, colors.text)
    c.setFont(FONT, 10)
    c.drawString(50, 45, f"Sayfa {page_number} / {total_pages}")
    fill(c, colors.secondary)
    c.setFont(FONT, 8)
    c.drawString(150, 45, INSTRUCTION)
    c.restoreState()


PLUGIN = ThemePlugin(
    config=CONFIG,
    render_header=render_header,
    render_footer=render_footer,
    render_question_box=render_question_box,
)
