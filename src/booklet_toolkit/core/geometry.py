"""
Module: core.geometry

Purpose:
    Page geometry and unit conversion for booklet layout.
    Defines the A4 page, margins and reservations, and the single
    pixel-to-point conversion used by the planner.

Key Functions:
    - mm(): Millimetres to PDF points
    - px_to_pt(): Source pixels to PDF points (300 DPI convention)

Key Classes:
    - PageGeometry: Immutable page geometry

Dependencies:
    - reportlab: A4 page size, mm unit
    - dataclasses (std)

Used By:
    - builder.layout.allocator: Content-area bookkeeping
    - builder.layout.planner: Question placement
    - themes: Header and footer drawing
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.units import mm as _MM


# Source images are rasterised at 300 DPI; PDF points are 1/72 inch.
SOURCE_DPI = 300

# A4 portrait in points (rounded the way the booklet has always been laid out)
PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0


def mm(value: float) -> float:
    """
    Convert millimetres to PDF points.

    Args:
        value: Length in millimetres

    Returns:
        Length in points

    Example:
        >>> round(mm(5), 2)
        14.17
    """
    return value * _MM


def px_to_pt(px: float, dpi: int = SOURCE_DPI) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch. Question images are always treated as
    300 DPI rasters; embedded DPI metadata is never consulted.

    Args:
        px: Pixel value
        dpi: Dots per inch

    Returns:
        Value in PDF points
    """
    return px * 72.0 / dpi


@dataclass(frozen=True)
class PageGeometry:
    """
    Page geometry for booklet layout (immutable).

    All values are in PDF points with a bottom-left origin.

    Attributes:
        page_width: Page width
        page_height: Page height
        margin_left: Left margin (5 mm)
        margin_right: Right margin (5 mm)
        margin_top: Top reservation above the header (10 mm)
        divider_width: Width of the gap between columns
        footer_space: Reservation at the bottom of every page for the footer
        number_reserve: Extra height reserved when checking whether a question fits
        number_strip: Height of the question-number strip above each image
        question_gap: Extra vertical gap consumed after each question
        min_content_height: Floor for the usable content height

    Example:
        >>> geometry = PageGeometry()
        >>> round(geometry.available_width, 2)
        566.65
    """

    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin_left: float = mm(5)
    margin_right: float = mm(5)
    margin_top: float = mm(10)
    divider_width: float = 1.0
    footer_space: float = 50.0
    number_reserve: float = 30.0
    number_strip: float = 15.0
    question_gap: float = 20.0
    min_content_height: float = 100.0

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.footer_space < 0 or self.divider_width < 0:
            raise ValueError("Reservations must not be negative")
        if self.min_content_height <= 0:
            raise ValueError(f"min_content_height must be positive: {self.min_content_height}")

    @property
    def available_width(self) -> float:
        """Width available for content (excluding side margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def header_top(self) -> float:
        """Y coordinate of the first header baseline."""
        return self.page_height - self.margin_top - 14.0
