"""Theme configuration validation.

Runs once when a theme is registered so the rendering path can read
configuration fields directly without re-checking them.
"""
from __future__ import annotations

import logging

from booklet_toolkit.core.models.options import WatermarkKind

from .models import (
    BORDER_STYLES,
    FOOTER_STYLES,
    HEADER_STYLES,
    QUESTION_BOX_STYLES,
    ThemeConfig,
)

logger = logging.getLogger(__name__)


class ThemeValidationError(RuntimeError):
    """Raised when a theme configuration is unusable."""


def _check_rgb(name: str, value: object, errors: list[str]) -> None:
    if not isinstance(value, tuple) or len(value) != 3:
        errors.append(f"{name} must be an (r, g, b) tuple")
        return
    if any(not isinstance(c, (int, float)) or not 0 <= c <= 1 for c in value):
        errors.append(f"{name} components must be in [0, 1]: {value}")


def validate_theme_config(config: ThemeConfig) -> ThemeConfig:
    """Validate a theme configuration.

    Args:
        config: Configuration to check.

    Returns:
        The same configuration, for chaining.

    Raises:
        ThemeValidationError: If any field is out of range.
    """
    errors: list[str] = []

    if not config.id or not config.id.strip():
        errors.append("id must not be empty")
    if not config.name:
        errors.append("name must not be empty")

    for attr in ("primary", "secondary", "accent", "background", "text", "border"):
        _check_rgb(f"colors.{attr}", getattr(config.colors, attr), errors)

    layout = config.layout
    if layout.columns not in (1, 2):
        errors.append(f"layout.columns must be 1 or 2: {layout.columns}")
    if layout.question_spacing < 0:
        errors.append(f"layout.question_spacing must be >= 0: {layout.question_spacing}")
    if layout.image_scale_boost <= 0:
        errors.append(f"layout.image_scale_boost must be positive: {layout.image_scale_boost}")
    if layout.inner_pad < 0:
        errors.append(f"layout.inner_pad must be >= 0: {layout.inner_pad}")
    if layout.answer_area_height < 0:
        errors.append(f"layout.answer_area_height must be >= 0: {layout.answer_area_height}")
    if layout.border_style not in BORDER_STYLES:
        errors.append(f"layout.border_style unknown: {layout.border_style}")
    if layout.question_box_style not in QUESTION_BOX_STYLES:
        errors.append(f"layout.question_box_style unknown: {layout.question_box_style}")
    if layout.header_style not in HEADER_STYLES:
        errors.append(f"layout.header_style unknown: {layout.header_style}")
    if layout.footer_style not in FOOTER_STYLES:
        errors.append(f"layout.footer_style unknown: {layout.footer_style}")

    watermark = config.default_watermark
    if watermark is not None and watermark.kind is not WatermarkKind.NONE and not watermark.content:
        errors.append("default_watermark has no content")

    if config.answer_key_in_metadata and config.include_answer_key:
        logger.warning(
            f"Theme {config.id!r} sets include_answer_key and answer_key_in_metadata; "
            "the printed page takes precedence"
        )

    if errors:
        raise ThemeValidationError(f"Invalid theme {config.id!r}: " + "; ".join(errors))

    return config
