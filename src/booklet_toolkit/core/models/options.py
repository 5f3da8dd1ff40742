"""
Module: core.models.options

Purpose:
    Generation options chosen by the caller: theme, watermark,
    answer-key inclusion, theme fields and layout overrides.

Key Classes:
    - WatermarkKind / WatermarkPosition: Watermark enums
    - WatermarkSpec: Immutable watermark description
    - LayoutOverrides: Per-build column/spacing overrides
    - GenerationOptions: Options for one build

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - themes: Default watermarks, watermark drawing
    - builder.controller: Option resolution
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

# RGB triple with components in [0, 1]
Rgb = Tuple[float, float, float]

# Opacity limits applied to every watermark, whatever the caller asked for
MIN_WATERMARK_OPACITY = 0.05
MAX_WATERMARK_OPACITY = 0.15
DEFAULT_WATERMARK_OPACITY = 0.08

# Answer-key pages carry a fainter watermark
ANSWER_KEY_WATERMARK_OPACITY = 0.1


class WatermarkKind(str, Enum):
    NONE = "none"
    TEXT = "text"
    IMAGE = "image"


class WatermarkPosition(str, Enum):
    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


def clamp_opacity(value: Optional[float]) -> float:
    """
    Clamp a requested opacity into the printable watermark range.

    Args:
        value: Requested opacity, or None for the default

    Returns:
        Opacity in [0.05, 0.15]

    Example:
        >>> clamp_opacity(0.9)
        0.15
    """
    if value is None:
        value = DEFAULT_WATERMARK_OPACITY
    return min(MAX_WATERMARK_OPACITY, max(MIN_WATERMARK_OPACITY, float(value)))


@dataclass(frozen=True)
class WatermarkSpec:
    """
    Watermark description (immutable value type).

    Attributes:
        kind: none, text or image
        content: Text for text watermarks; image bytes or a base64
            data URL for image watermarks
        opacity: Requested opacity (clamped when drawn)
        position: Anchor on the page
        size: Font size for text; percentage scale for images
        rotation_degrees: Rotation (text defaults to -30, image to 0)
        color: Text colour (defaults to light grey)

    Example:
        >>> wm = WatermarkSpec(kind=WatermarkKind.TEXT, content="DENEME", opacity=0.5)
        >>> wm.effective_opacity
        0.15
    """

    kind: WatermarkKind = WatermarkKind.NONE
    content: Union[str, bytes, None] = None
    opacity: Optional[float] = None
    position: WatermarkPosition = WatermarkPosition.CENTER
    size: Optional[float] = None
    rotation_degrees: Optional[float] = None
    color: Optional[Rgb] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", WatermarkKind(self.kind))
        object.__setattr__(self, "position", WatermarkPosition(self.position))

    @property
    def is_visible(self) -> bool:
        """True when there is something to draw."""
        return self.kind is not WatermarkKind.NONE and bool(self.content)

    @property
    def effective_opacity(self) -> float:
        """Opacity actually used when drawing."""
        return clamp_opacity(self.opacity)

    def attenuated(self, ceiling: float = ANSWER_KEY_WATERMARK_OPACITY) -> "WatermarkSpec":
        """Return a fainter copy whose opacity never exceeds ceiling."""
        requested = self.opacity if self.opacity else DEFAULT_WATERMARK_OPACITY
        return replace(self, opacity=min(ceiling, clamp_opacity(requested)))


@dataclass(frozen=True)
class LayoutOverrides:
    """
    Per-build layout overrides.

    Attributes:
        columns: Column count (1 or 2), None keeps the theme's
        question_spacing: Spacing in points, None keeps metadata/theme
    """

    columns: Optional[int] = None
    question_spacing: Optional[int] = None

    def __post_init__(self) -> None:
        if self.columns is not None and self.columns not in (1, 2):
            raise ValueError(f"columns must be 1 or 2: {self.columns}")
        if self.question_spacing is not None and self.question_spacing < 0:
            object.__setattr__(self, "question_spacing", 0)


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options for one build (immutable).

    Attributes:
        theme_id: Theme to render with (unknown ids fall back to the default)
        watermark: Explicit watermark. None defers to the theme default;
            an explicit kind=none disables the watermark.
        include_answer_key: Explicit answer-key choice, None defers to the theme
        custom_fields: Theme fields (override metadata custom fields)
        custom_layout: Column/spacing overrides
    """

    theme_id: str = "classic"
    watermark: Optional[WatermarkSpec] = None
    include_answer_key: Optional[bool] = None
    custom_fields: Mapping[str, str] = field(default_factory=dict)
    custom_layout: Optional[LayoutOverrides] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "custom_fields", MappingProxyType(dict(self.custom_fields or {})))
