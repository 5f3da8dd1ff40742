"""
Module: themes.models

Purpose:
    Immutable theme configuration: colours, layout parameters, field
    visibility, background artwork and answer-key policy.

Key Classes:
    - ThemeColors: Palette used by header/footer/answer-key drawing
    - ThemeLayout: Columns, spacing and placement tuning
    - ThemeFields: Which student/school fields a theme prints
    - ThemeConfig: Complete theme configuration

Dependencies:
    - dataclasses (std)
    - core.models.options: Rgb, WatermarkSpec

Used By:
    - themes.validation: Registration-time checks
    - builder.layout.planner: Column count, scale boost, gutter offsets
    - builder.assets.cache: Background candidates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from booklet_toolkit.core.models.options import Rgb, WatermarkSpec

BORDER_STYLES = ("none", "subtle", "bold", "decorative")
QUESTION_BOX_STYLES = ("none", "minimal", "modern", "classic")
HEADER_STYLES = ("minimal", "standard", "detailed")
FOOTER_STYLES = ("minimal", "standard", "detailed")


@dataclass(frozen=True)
class ThemeColors:
    """Theme palette; every colour is an RGB triple in [0, 1]."""

    primary: Rgb = (0.1, 0.1, 0.1)
    secondary: Rgb = (0.3, 0.3, 0.3)
    accent: Rgb = (0.5, 0.5, 0.5)
    background: Rgb = (1.0, 1.0, 1.0)
    text: Rgb = (0.1, 0.1, 0.1)
    border: Rgb = (0.8, 0.8, 0.8)


@dataclass(frozen=True)
class ThemeLayout:
    """
    Layout parameters a theme controls (immutable).

    Attributes:
        columns: 1 or 2
        question_spacing: Default spacing in points when metadata has none
        border_style / question_box_style / header_style / footer_style:
            Style names describing the theme (informational for hooks)
        show_column_divider: Whether the divider hook draws anything
        image_scale_boost: Multiplier applied to the natural image size
        inner_pad: Distance from the gutter to the image edge
        image_offset_x: Horizontal shift applied after gutter anchoring
        answer_area_height: Space reserved under each question for written
            answers (0 for multiple-choice themes)
    """

    columns: int = 2
    question_spacing: int = 5
    border_style: str = "subtle"
    question_box_style: str = "minimal"
    header_style: str = "standard"
    footer_style: str = "minimal"
    show_column_divider: bool = True
    image_scale_boost: float = 1.0
    inner_pad: float = 50.0
    image_offset_x: float = -20.0
    answer_area_height: float = 0.0


@dataclass(frozen=True)
class ThemeFields:
    """Visibility flags for optional header fields."""

    school_name: bool = False
    student_name: bool = False
    student_number: bool = False
    signature: bool = False
    exam_code: bool = False
    booklet_number: bool = False
    answer_grid: bool = False


@dataclass(frozen=True)
class ThemeConfig:
    """
    Complete theme configuration (immutable).

    Attributes:
        id: Registry key (e.g. "classic", "yazili-sinav")
        name: Display name
        description: One-line description for theme pickers
        colors: Palette
        layout: Layout parameters
        fields: Header field visibility
        default_watermark: Watermark used when the caller gives none
        background_path: Full-page artwork path, None for plain white
        background_fallbacks: Family artwork tried when the primary fails
        include_answer_key: Whether an answer-key page is appended by default
        answer_key_in_metadata: Hide the key in PDF keywords when no page is printed

    Example:
        >>> config = ThemeConfig(id="plain", name="Plain")
        >>> config.layout.columns
        2
    """

    id: str
    name: str
    description: str = ""
    colors: ThemeColors = field(default_factory=ThemeColors)
    layout: ThemeLayout = field(default_factory=ThemeLayout)
    fields: ThemeFields = field(default_factory=ThemeFields)
    default_watermark: Optional[WatermarkSpec] = None
    background_path: Optional[str] = None
    background_fallbacks: tuple[str, ...] = ()
    include_answer_key: bool = True
    answer_key_in_metadata: bool = False
