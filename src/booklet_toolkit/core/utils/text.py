"""
Text Utilities

Sanitises user text for the standard PDF fonts and document info
dictionary, and builds download file names.

Turkish letters are transliterated with a fixed table first so that
dotless i and friends come out as readable ASCII; anything else is
reduced with Unicode decomposition and non-ASCII characters dropped.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from typing import Optional

_TRANSLITERATION = str.maketrans({
    "ı": "i", "İ": "I",
    "ş": "s", "Ş": "S",
    "ç": "c", "Ç": "C",
    "ğ": "g", "Ğ": "G",
    "ü": "u", "Ü": "U",
    "ö": "o", "Ö": "O",
})

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_text(text: Optional[str]) -> str:
    """
    Reduce text to printable ASCII.

    Args:
        text: Any user-supplied string (None gives "")

    Returns:
        ASCII-only string with control characters removed

    Example:
        >>> sanitize_text("Öğretmen Şükrü Işık")
        'Ogretmen Sukru Isik'
    """
    if not text:
        return ""
    transliterated = str(text).translate(_TRANSLITERATION)
    decomposed = unicodedata.normalize("NFKD", transliterated)
    ascii_text = decomposed.encode("ascii", "ignore").decode("ascii")
    return "".join(ch for ch in ascii_text if ch.isprintable())


def generate_test_filename(
    class_name: Optional[str],
    course_name: Optional[str],
    test_name: Optional[str],
    on: Optional[date] = None,
) -> str:
    """
    Build a download file name like ``9-A_Matematik_Deneme-1_2024-05-01.pdf``.

    Missing parts fall back to Sinif / Ders / Test.
    """
    day = (on or date.today()).isoformat()
    parts = [
        sanitize_text(class_name) or "Sinif",
        sanitize_text(course_name) or "Ders",
        sanitize_text(test_name) or "Test",
    ]
    stem = "_".join(_UNSAFE_FILENAME.sub("-", p.strip()).strip("-") or "x" for p in parts)
    return f"{stem}_{day}.pdf"
