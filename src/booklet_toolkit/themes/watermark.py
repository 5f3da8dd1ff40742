"""
Module: themes.watermark

Purpose:
    Draw text and image watermarks, and provide the per-theme watermark
    presets offered to users.

Key Functions:
    - draw_watermark(): Default watermark hook
    - watermark_anchor(): Page coordinates for a WatermarkPosition
    - default_watermark_for_theme(): Suggested watermark per theme

Key Classes:
    - PreparedWatermark: WatermarkSpec with its artwork already decoded

Dependencies:
    - reportlab: Canvas drawing, ImageReader
    - core.models.options: WatermarkSpec and enums

Used By:
    - themes.plugin: Default render_watermark hook
    - builder.output.renderer: Page finishing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.options import (
    WatermarkKind,
    WatermarkPosition,
    WatermarkSpec,
)
from booklet_toolkit.core.utils.text import sanitize_text

logger = logging.getLogger(__name__)

TEXT_WATERMARK_FONT = "Helvetica-Bold"
MIN_TEXT_SIZE = 40.0
DEFAULT_TEXT_SIZE = 48.0
DEFAULT_TEXT_ROTATION = -30.0
DEFAULT_TEXT_COLOR = (0.8, 0.8, 0.8)

# Image watermarks fit inside this share of the page and are never enlarged
IMAGE_MAX_PAGE_FRACTION = 0.4

# Distance of corner anchors from the page edges
CORNER_INSET = 100.0


@dataclass(frozen=True)
class PreparedWatermark:
    """
    Watermark ready to draw (immutable).

    Attributes:
        spec: The resolved watermark
        image: Decoded artwork for image watermarks (None when absent or
            undecodable; the watermark is then skipped)
    """

    spec: WatermarkSpec
    image: Optional[ImageReader] = None

    @property
    def is_drawable(self) -> bool:
        if not self.spec.is_visible:
            return False
        if self.spec.kind is WatermarkKind.IMAGE:
            return self.image is not None
        return True


def watermark_anchor(position: WatermarkPosition, geometry: PageGeometry) -> tuple[float, float]:
    """
    Page coordinates of a watermark anchor.

    Example:
        >>> watermark_anchor(WatermarkPosition.CENTER, PageGeometry())
        (297.5, 421.0)
    """
    w, h = geometry.page_width, geometry.page_height
    anchors = {
        WatermarkPosition.CENTER: (w / 2, h / 2),
        WatermarkPosition.TOP_LEFT: (CORNER_INSET, h - CORNER_INSET),
        WatermarkPosition.TOP_RIGHT: (w - CORNER_INSET, h - CORNER_INSET),
        WatermarkPosition.BOTTOM_LEFT: (CORNER_INSET, CORNER_INSET),
        WatermarkPosition.BOTTOM_RIGHT: (w - CORNER_INSET, CORNER_INSET),
    }
    return anchors[position]


def draw_watermark(c: Canvas, watermark: PreparedWatermark, geometry: PageGeometry) -> None:
    """
    Draw a watermark on the current page.

    Opacity is always clamped into [0.05, 0.15]. Text is centred on its
    anchor and rotated about it; images are scaled to fit 40% of the
    page (never enlarged), then multiplied by size/100.

    Args:
        c: ReportLab canvas
        watermark: Prepared watermark
        geometry: Page geometry for anchor calculation
    """
    if not watermark.is_drawable:
        return

    spec = watermark.spec
    x, y = watermark_anchor(spec.position, geometry)

    c.saveState()
    c.setFillAlpha(spec.effective_opacity)
    c.setStrokeAlpha(spec.effective_opacity)
    c.translate(x, y)

    if spec.kind is WatermarkKind.TEXT:
        text = sanitize_text(str(spec.content))
        size = max(MIN_TEXT_SIZE, spec.size or DEFAULT_TEXT_SIZE)
        rotation = DEFAULT_TEXT_ROTATION if spec.rotation_degrees is None else spec.rotation_degrees
        r, g, b = (min(1.0, max(0.0, v)) for v in (spec.color or DEFAULT_TEXT_COLOR))
        c.rotate(rotation)
        c.setFillColorRGB(r, g, b)
        c.setFont(TEXT_WATERMARK_FONT, size)
        c.drawCentredString(0, -size / 3, text)
    else:
        image_w, image_h = watermark.image.getSize()
        fit = min(
            geometry.page_width * IMAGE_MAX_PAGE_FRACTION / image_w,
            geometry.page_height * IMAGE_MAX_PAGE_FRACTION / image_h,
            1.0,
        )
        scale = fit * ((spec.size or 100.0) / 100.0)
        width, height = image_w * scale, image_h * scale
        c.rotate(spec.rotation_degrees or 0.0)
        c.drawImage(watermark.image, -width / 2, -height / 2, width=width, height=height, mask="auto")

    c.restoreState()


_PRESETS: dict[str, WatermarkSpec] = {
    "classic": WatermarkSpec(
        kind=WatermarkKind.TEXT, content="TEST", opacity=0.08, size=50,
        rotation_degrees=-30, color=(0.0, 0.75, 0.8),
    ),
    "yaprak-test": WatermarkSpec(
        kind=WatermarkKind.TEXT, content="YAPRAK TEST", opacity=0.1, size=48,
        rotation_degrees=-45, color=(0.2, 0.6, 0.3),
    ),
    "deneme-sinavi": WatermarkSpec(
        kind=WatermarkKind.TEXT, content="DENEME", opacity=0.08, size=60,
        rotation_degrees=-30, color=(0.2, 0.4, 0.8),
    ),
    "yazili-sinav": WatermarkSpec(
        kind=WatermarkKind.TEXT, content="YAZILI SINAV", opacity=0.06, size=40,
        rotation_degrees=0, color=(0.3, 0.3, 0.3),
    ),
    "yks-2025": WatermarkSpec(
        kind=WatermarkKind.TEXT, content="YKS", opacity=0.08, size=55,
        rotation_degrees=-30, color=(0.1, 0.3, 0.8),
    ),
}


def default_watermark_for_theme(theme_id: str) -> WatermarkSpec:
    """
    Suggested watermark for a theme, as offered in the watermark picker.

    Unknown themes get an empty (kind=none) watermark.
    """
    return _PRESETS.get(theme_id, WatermarkSpec())
