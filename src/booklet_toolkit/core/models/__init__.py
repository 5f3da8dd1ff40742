"""
Core Models Package

Immutable, validated data models describing one booklet build:
the questions, the teacher's metadata and the generation options.

All models in this package are frozen dataclasses, so a build can
never mutate what the caller handed in.
"""

from .questions import AnswerChoice, Question
from .metadata import Metadata, ThemedMetadata
from .options import (
    GenerationOptions,
    LayoutOverrides,
    Rgb,
    WatermarkKind,
    WatermarkPosition,
    WatermarkSpec,
    clamp_opacity,
)

__all__ = [
    "AnswerChoice",
    "Question",
    "Metadata",
    "ThemedMetadata",
    "GenerationOptions",
    "LayoutOverrides",
    "Rgb",
    "WatermarkKind",
    "WatermarkPosition",
    "WatermarkSpec",
    "clamp_opacity",
]
