"""
Module: core.models.questions

Purpose:
    Provides the Question dataclass - one pre-rasterised question image
    with its answer and print position. Immutable and validated on
    construction.

Key Classes:
    - AnswerChoice: Multiple-choice answer letter
    - Question: Question record handed over by the cropping UI

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.layout.planner: Size calculation
    - builder.output.renderer: Image drawing
    - builder.output.answer_key: Answer grid and hidden key
    - core.utils.serialization: Payload decoding
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AnswerChoice(str, Enum):
    """Answer letter of a multiple-choice question."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"

    @classmethod
    def parse(cls, value: object) -> "AnswerChoice":
        """
        Parse a letter (any case, surrounding whitespace ignored).

        Raises:
            ValueError: If value is not one of A-E
        """
        if isinstance(value, AnswerChoice):
            return value
        text = str(value).strip().upper()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"correct_answer must be one of A-E: {value!r}") from None


@dataclass(frozen=True)
class Question:
    """
    Cropped question ready for printing (immutable).

    Attributes:
        id: Unique identifier assigned by the cropping UI
        image_data: Encoded lossless raster (PNG bytes)
        correct_answer: Answer letter A-E
        order: Zero-based print position
        actual_width: Raster width in pixels at 300 DPI
        actual_height: Raster height in pixels at 300 DPI
        source_document_id: Document the question was cropped from

    Invariants:
        - question_number is always order + 1
        - Non-positive pixel sizes are accepted; the planner clamps them

    Example:
        >>> q = Question(id="q1", image_data=png, correct_answer=AnswerChoice.C,
        ...              order=0, actual_width=1200, actual_height=600)
        >>> q.question_number
        1
    """

    id: str
    image_data: bytes
    correct_answer: AnswerChoice
    order: int
    actual_width: int
    actual_height: int
    source_document_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not self.id:
            raise ValueError("Question id must not be empty")
        if not isinstance(self.image_data, (bytes, bytearray)):
            raise TypeError(f"image_data must be bytes, got {type(self.image_data).__name__}")
        if self.order < 0:
            raise ValueError(f"order must be >= 0: {self.order}")
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "correct_answer", AnswerChoice.parse(self.correct_answer))

    @property
    def question_number(self) -> int:
        """1-based number printed next to the question."""
        return self.order + 1

    @property
    def has_valid_size(self) -> bool:
        """True when both pixel dimensions are positive."""
        return self.actual_width > 0 and self.actual_height > 0
