"""
Module: builder.output.canvas

Purpose:
    ReportLab canvas that defers page emission. Completed pages are
    held back until the whole booklet is laid out, so footers can print
    the final page total and the watermark can be drawn last, on top of
    everything else on the page.

Key Classes:
    - DeferredPageCanvas: Canvas with a page-finishing pass

Dependencies:
    - reportlab: Canvas

Used By:
    - builder.output.renderer: Page state machine
"""

from __future__ import annotations

import io
import logging
from typing import Callable, List

from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# Called for every page once its content is complete: (canvas, page_index, total_pages)
PageFinisher = Callable[["DeferredPageCanvas", int, int], None]


class DeferredPageCanvas(canvas.Canvas):
    """
    Canvas that buffers pages until emit_pages() is called.

    showPage() snapshots the page state instead of writing it. emit_pages()
    replays each snapshot, lets the caller draw on top of it, and then
    emits the page.

    Example:
        >>> c = DeferredPageCanvas(io.BytesIO(), pagesize=A4)
        >>> c.drawString(50, 800, "Hello")
        >>> c.showPage()
        >>> c.emit_pages(lambda c, i, total: c.drawString(545, 45, str(i + 1)))
        >>> c.save()
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._saved_pages: List[dict] = []

    def showPage(self) -> None:
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    @property
    def pending_page_count(self) -> int:
        """Pages completed with showPage() and not yet emitted."""
        return len(self._saved_pages)

    def emit_pages(self, finisher: PageFinisher) -> int:
        """
        Emit all buffered pages. The document is written by save().

        Args:
            finisher: Drawing pass applied to each page before it is emitted

        Returns:
            Number of pages emitted
        """
        total = len(self._saved_pages)
        for index, state in enumerate(self._saved_pages):
            self.__dict__.update(state)
            finisher(self, index, total)
            canvas.Canvas.showPage(self)
        self._saved_pages = []
        logger.debug(f"Emitted {total} pages")
        return total


def new_canvas(buffer: io.BytesIO, pagesize: tuple[float, float]) -> DeferredPageCanvas:
    """Create a deferred canvas writing into buffer."""
    return DeferredPageCanvas(buffer, pagesize=pagesize, pageCompression=1)
