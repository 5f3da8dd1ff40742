"""
Module: themes.tyt_2024

Purpose:
    Minimal national-exam style theme: one-line metadata header, no
    question decoration, right-aligned page number and a very faint
    "DENEME" watermark.
"""

from __future__ import annotations

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata
from booklet_toolkit.core.models.options import WatermarkKind, WatermarkSpec

from .defaults import BOLD_FONT, FONT, fill, metadata_strip
from .models import ThemeColors, ThemeConfig, ThemeLayout
from .plugin import ThemePlugin

CONFIG = ThemeConfig(
    id="tyt-2024",
    name="TYT 2024 Professional",
    description="Clean exam template with modern typography and minimal design",
    colors=ThemeColors(
        primary=(0.067, 0.067, 0.067),
        secondary=(0.2, 0.2, 0.2),
        accent=(0.4, 0.4, 0.4),
        background=(1.0, 1.0, 1.0),
        text=(0.067, 0.067, 0.067),
        border=(0.9, 0.9, 0.9),
    ),
    layout=ThemeLayout(
        columns=2,
        question_spacing=12,
        border_style="none",
        question_box_style="none",
        header_style="minimal",
        footer_style="minimal",
        show_column_divider=False,
    ),
    default_watermark=WatermarkSpec(
        kind=WatermarkKind.TEXT,
        content="DENEME",
        opacity=0.05,
        size=72,
        rotation_degrees=-30,
        color=(0.5, 0.5, 0.5),
    ),
    background_path="/themes/test-04.png",
    background_fallbacks=("/themes/test-04.png",),
    include_answer_key=True,
)


def render_header(c: Canvas, metadata: ThemedMetadata, geometry: PageGeometry) -> float:
    y = 800.0
    c.saveState()
    fill(c, CONFIG.colors.primary)
    c.setFont(BOLD_FONT, 12)
    c.drawString(50, y, metadata_strip(metadata))
    c.restoreState()
    return y - 35


def render_footer(c: Canvas, page_number: int, total_pages: int, geometry: PageGeometry) -> None:
    c.saveState()
    fill(c, CONFIG.colors.secondary)
    c.setFont(FONT, 10)
    c.drawString(geometry.page_width - 50, 45, str(page_number))
    c.restoreState()


PLUGIN = ThemePlugin(
    config=CONFIG,
    render_header=render_header,
    render_footer=render_footer,
)
