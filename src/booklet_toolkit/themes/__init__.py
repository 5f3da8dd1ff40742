"""
Module: themes

Purpose:
    Theme plugins for booklet rendering. Each theme is a configuration
    plus optional drawing hooks; the registry completes missing hooks
    with engine defaults at registration.

Bundled themes:
    - classic (default), yaprak-test, deneme-sinavi, yazili-sinav,
      tyt-2024, yks-2025

Key Objects:
    - default_registry: Registry populated with the bundled themes
    - ThemeRegistry / ThemePlugin / ThemeConfig

Used By:
    - builder.controller: Theme resolution per build
"""

from .models import ThemeColors, ThemeConfig, ThemeFields, ThemeLayout
from .plugin import ThemePlugin
from .registry import DEFAULT_THEME_ID, MissingThemeError, ThemeRegistry, build_default_registry
from .validation import ThemeValidationError, validate_theme_config
from .watermark import PreparedWatermark, default_watermark_for_theme, draw_watermark

default_registry = build_default_registry()

__all__ = [
    "ThemeColors",
    "ThemeConfig",
    "ThemeFields",
    "ThemeLayout",
    "ThemePlugin",
    "ThemeRegistry",
    "DEFAULT_THEME_ID",
    "MissingThemeError",
    "build_default_registry",
    "ThemeValidationError",
    "validate_theme_config",
    "PreparedWatermark",
    "default_watermark_for_theme",
    "draw_watermark",
    "default_registry",
]
