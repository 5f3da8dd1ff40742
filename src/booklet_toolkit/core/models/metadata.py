"""
Module: core.models.metadata

Purpose:
    Booklet metadata entered by the teacher, and the theme-facing view
    that adds theme-specific fields (school, student, exam code...).

Key Classes:
    - Metadata: Caller-supplied metadata
    - ThemedMetadata: Metadata plus typed theme fields and issue date

Dependencies:
    - dataclasses (std)
    - datetime (std)

Used By:
    - themes: Header drawing
    - builder.output.metadata: Document info stamping
    - builder.controller: Build entry point
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional


# Custom-field keys understood by the typed ThemedMetadata fields.
# Both the UI's camelCase and snake_case are accepted.
_THEMED_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "school_name": ("schoolName", "school_name", "school"),
    "student_name": ("studentName", "student_name"),
    "student_number": ("studentNumber", "student_number", "number"),
    "exam_code": ("examCode", "exam_code"),
    "booklet_number": ("bookletNumber", "booklet_number"),
    "term": ("term", "semester"),
}


def _frozen_mapping(values: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class Metadata:
    """
    Booklet metadata (immutable).

    Attributes:
        test_name: Title of the test
        course_name: Course / subject
        class_name: Class the test is for
        teacher_name: Teacher who prepared the test
        question_spacing: Vertical spacing between questions in points.
            None means "use the theme's spacing". Negative values are
            clamped to 0 rather than rejected.
        custom_fields: Free-form theme fields (school name, exam code...)
    """

    test_name: Optional[str] = None
    course_name: Optional[str] = None
    class_name: Optional[str] = None
    teacher_name: Optional[str] = None
    question_spacing: Optional[int] = None
    custom_fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.question_spacing is not None:
            if isinstance(self.question_spacing, bool) or not isinstance(self.question_spacing, (int, float)):
                raise TypeError(f"question_spacing must be a number: {self.question_spacing!r}")
            object.__setattr__(self, "question_spacing", max(0, int(self.question_spacing)))
        object.__setattr__(self, "custom_fields", _frozen_mapping(self.custom_fields))


@dataclass(frozen=True)
class ThemedMetadata:
    """
    Metadata as seen by theme hooks (immutable).

    Built once per build from the caller's Metadata and the option
    custom fields; the caller's objects are never mutated.

    Attributes:
        base: The caller's metadata
        school_name, student_name, student_number, exam_code,
        booklet_number, term: Typed theme fields (None when absent)
        custom_fields: Merged custom fields (options override metadata)
        issued_on: Date printed in headers
    """

    base: Metadata
    school_name: Optional[str] = None
    student_name: Optional[str] = None
    student_number: Optional[str] = None
    exam_code: Optional[str] = None
    booklet_number: Optional[str] = None
    term: Optional[str] = None
    custom_fields: Mapping[str, str] = field(default_factory=dict)
    issued_on: date = field(default_factory=date.today)

    @classmethod
    def from_metadata(
        cls,
        metadata: Metadata,
        custom_fields: Optional[Mapping[str, str]] = None,
        issued_on: Optional[date] = None,
    ) -> "ThemedMetadata":
        """
        Merge metadata and option custom fields into a themed view.

        Args:
            metadata: Caller metadata
            custom_fields: Option-level fields; override metadata fields
            issued_on: Date for headers (defaults to today)

        Returns:
            ThemedMetadata with typed fields populated from known keys
        """
        option_fields = dict(custom_fields or {})
        merged = dict(metadata.custom_fields)
        merged.update(option_fields)

        typed: dict[str, Optional[str]] = {}
        for attr, keys in _THEMED_FIELD_KEYS.items():
            # Option fields win over metadata fields whatever key style they use
            typed[attr] = next(
                (
                    str(source[k])
                    for source in (option_fields, metadata.custom_fields)
                    for k in keys
                    if source.get(k) not in (None, "")
                ),
                None,
            )

        return cls(
            base=metadata,
            custom_fields=_frozen_mapping(merged),
            issued_on=issued_on or date.today(),
            **typed,
        )

    @property
    def test_name(self) -> Optional[str]:
        return self.base.test_name

    @property
    def course_name(self) -> Optional[str]:
        return self.base.course_name

    @property
    def class_name(self) -> Optional[str]:
        return self.base.class_name

    @property
    def teacher_name(self) -> Optional[str]:
        return self.base.teacher_name

    @property
    def date_label(self) -> str:
        """Issue date as printed in headers (dd.mm.yyyy)."""
        return self.issued_on.strftime("%d.%m.%Y")
