"""
Module: themes.plugin

Purpose:
    The theme plugin contract: a configuration plus optional drawing
    hooks. Missing hooks are replaced with engine defaults when the
    plugin is registered, so rendering never checks for presence.

Key Classes:
    - ThemePlugin: Configuration and hooks for one theme

Hook signatures:
    - render_header(canvas, metadata, geometry) -> content start y
    - render_footer(canvas, page_number, total_pages, geometry)
    - render_question_box(canvas, question, layout)
    - render_column_divider(canvas, area, geometry)
    - render_watermark(canvas, prepared_watermark, geometry)

Dependencies:
    - themes.defaults / themes.watermark: Default hooks

Used By:
    - themes.registry: Registration
    - builder.output.renderer: Page drawing
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Optional

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models.metadata import ThemedMetadata

from .defaults import (
    draw_default_footer,
    draw_default_header,
    draw_no_column_divider,
    draw_no_question_box,
)
from .models import ThemeConfig
from .watermark import PreparedWatermark, draw_watermark

if TYPE_CHECKING:
    from booklet_toolkit.builder.layout.models import ContentArea, QuestionLayout
    from booklet_toolkit.core.models.questions import Question

HeaderHook = Callable[[Canvas, ThemedMetadata, PageGeometry], float]
FooterHook = Callable[[Canvas, int, int, PageGeometry], None]
QuestionBoxHook = Callable[[Canvas, "Question", "QuestionLayout"], None]
ColumnDividerHook = Callable[[Canvas, "ContentArea", PageGeometry], None]
WatermarkHook = Callable[[Canvas, PreparedWatermark, PageGeometry], None]


@dataclass(frozen=True)
class ThemePlugin:
    """
    A theme: configuration plus optional drawing hooks (immutable).

    Attributes:
        config: Theme configuration
        render_header: First-page header; returns where content starts
        render_footer: Per-page footer, drawn once the page total is known
        render_question_box: Decoration drawn after each question image
        render_column_divider: Divider drawn when a content area opens
        render_watermark: Watermark drawer

    Example:
        >>> plugin = ThemePlugin(config=ThemeConfig(id="plain", name="Plain"))
        >>> plugin.with_defaults().render_footer is draw_default_footer
        True
    """

    config: ThemeConfig
    render_header: Optional[HeaderHook] = None
    render_footer: Optional[FooterHook] = None
    render_question_box: Optional[QuestionBoxHook] = None
    render_column_divider: Optional[ColumnDividerHook] = None
    render_watermark: Optional[WatermarkHook] = None

    @property
    def id(self) -> str:
        return self.config.id

    @property
    def is_complete(self) -> bool:
        """True when every hook is set."""
        return all(
            hook is not None
            for hook in (
                self.render_header,
                self.render_footer,
                self.render_question_box,
                self.render_column_divider,
                self.render_watermark,
            )
        )

    def with_defaults(self) -> "ThemePlugin":
        """Return a copy with every unset hook replaced by the engine default."""
        return replace(
            self,
            render_header=self.render_header or draw_default_header,
            render_footer=self.render_footer or draw_default_footer,
            render_question_box=self.render_question_box or draw_no_question_box,
            render_column_divider=self.render_column_divider or draw_no_column_divider,
            render_watermark=self.render_watermark or draw_watermark,
        )
