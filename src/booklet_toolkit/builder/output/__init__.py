"""
Module: builder.output

Purpose:
    PDF output: deferred-page canvas, page renderer, answer key and
    document information.

Key Functions:
    - prepare_watermark(): Decode watermark artwork before drawing
    - resolve_answer_key_mode(): Page / metadata / none
    - answer_key_keywords(): Hidden answer key string
    - document_info() / stamp_document_info(): PDF document information

Key Classes:
    - PageRenderer / BuildStage: Page state machine
    - DeferredPageCanvas: Canvas with a page-finishing pass
    - AnswerKeyMode: Answer-key delivery
"""

from .canvas import DeferredPageCanvas, new_canvas
from .answer_key import (
    AnswerKeyEntry,
    AnswerKeyMode,
    answer_key_entries,
    answer_key_keywords,
    draw_answer_key_page,
    paginate_answer_key,
    resolve_answer_key_mode,
)
from .metadata import DocumentInfo, document_info, stamp_document_info
from .renderer import BuildStage, PageRenderer, prepare_watermark

__all__ = [
    # Canvas
    "DeferredPageCanvas",
    "new_canvas",
    # Answer key
    "AnswerKeyEntry",
    "AnswerKeyMode",
    "answer_key_entries",
    "answer_key_keywords",
    "draw_answer_key_page",
    "paginate_answer_key",
    "resolve_answer_key_mode",
    # Document info
    "DocumentInfo",
    "document_info",
    "stamp_document_info",
    # Renderer
    "BuildStage",
    "PageRenderer",
    "prepare_watermark",
]
