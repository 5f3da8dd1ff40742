"""
Module: builder.output.metadata

Purpose:
    Stamp the PDF document information dictionary: title, author,
    subject, creator, producer and (for hidden answer keys) keywords.
    Every value is reduced to ASCII first.

Key Functions:
    - document_info(): Values to stamp for a build
    - stamp_document_info(): Apply them to a canvas

Dependencies:
    - reportlab: Canvas info setters
    - core.utils.text: sanitize_text

Used By:
    - builder.controller: Serialization step
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from reportlab.pdfgen.canvas import Canvas

from booklet_toolkit.core.models.metadata import Metadata
from booklet_toolkit.core.utils.text import sanitize_text

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Test"
DEFAULT_AUTHOR = "Test Olusturucu"
DEFAULT_COURSE = "Ders"
DEFAULT_CLASS = "Sinif"


@dataclass(frozen=True)
class DocumentInfo:
    """Document information values (already sanitised)."""

    title: str
    author: str
    subject: str
    creator: str
    producer: str
    keywords: Optional[str] = None


def document_info(
    metadata: Metadata,
    *,
    creator: str,
    producer: str,
    keywords: Optional[str] = None,
) -> DocumentInfo:
    """
    Build document information for a booklet.

    Args:
        metadata: Caller metadata
        creator: Application name
        producer: Producer string
        keywords: Hidden answer key, if any

    Returns:
        DocumentInfo with ASCII-only values
    """
    course = sanitize_text(metadata.course_name) or DEFAULT_COURSE
    class_name = sanitize_text(metadata.class_name) or DEFAULT_CLASS
    return DocumentInfo(
        title=sanitize_text(metadata.test_name) or DEFAULT_TITLE,
        author=sanitize_text(metadata.teacher_name) or DEFAULT_AUTHOR,
        subject=f"{course} - {class_name}",
        creator=sanitize_text(creator),
        producer=sanitize_text(producer),
        keywords=sanitize_text(keywords) if keywords else None,
    )


def stamp_document_info(c: Canvas, info: DocumentInfo) -> None:
    """Write document information; the creation date is set by ReportLab on save."""
    c.setTitle(info.title)
    c.setAuthor(info.author)
    c.setSubject(info.subject)
    c.setCreator(info.creator)
    c.setProducer(info.producer)
    if info.keywords:
        c.setKeywords(info.keywords)
    logger.debug(f"Stamped document info: title={info.title!r} subject={info.subject!r}")
