"""
Unit Tests for Question Model

Tests for the Question dataclass and AnswerChoice parsing.
"""

import pytest

from booklet_toolkit.core.models.questions import AnswerChoice, Question


class TestAnswerChoice:
    """Tests for AnswerChoice.parse."""

    @pytest.mark.parametrize("raw", ["c", " C ", "C", AnswerChoice.C])
    def test_parse_when_letter_variants_then_normalises(self, raw):
        assert AnswerChoice.parse(raw) is AnswerChoice.C

    def test_parse_when_not_a_letter_then_raises(self):
        with pytest.raises(ValueError, match="A-E"):
            AnswerChoice.parse("F")


class TestQuestion:
    """Tests for Question dataclass."""

    def test_init_when_valid_data_then_creates_question(self, png_bytes):
        """Valid question data should be created successfully."""
        q = Question(
            id="q1",
            image_data=png_bytes,
            correct_answer="b",
            order=4,
            actual_width=1200,
            actual_height=600,
        )
        assert q.correct_answer is AnswerChoice.B
        assert q.question_number == 5
        assert q.has_valid_size

    def test_init_when_empty_id_then_raises_error(self, png_bytes):
        with pytest.raises(ValueError, match="id"):
            Question(id="", image_data=png_bytes, correct_answer="A", order=0,
                     actual_width=1, actual_height=1)

    def test_init_when_negative_order_then_raises_error(self, png_bytes):
        with pytest.raises(ValueError, match="order"):
            Question(id="q", image_data=png_bytes, correct_answer="A", order=-1,
                     actual_width=1, actual_height=1)

    def test_init_when_image_not_bytes_then_raises_type_error(self):
        with pytest.raises(TypeError, match="image_data"):
            Question(id="q", image_data="data:image/png;base64,AAAA", correct_answer="A",
                     order=0, actual_width=1, actual_height=1)

    def test_init_when_zero_size_then_accepted_but_flagged(self, png_bytes):
        """Non-positive sizes are clamped later by the planner, not rejected here."""
        q = Question(id="q", image_data=png_bytes, correct_answer="A", order=0,
                     actual_width=0, actual_height=-5)
        assert not q.has_valid_size

    def test_frozen_when_assigning_then_raises(self, make_question):
        q = make_question()
        with pytest.raises(Exception):
            q.order = 3
