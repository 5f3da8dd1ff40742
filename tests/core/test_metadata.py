"""
Unit Tests for Metadata and ThemedMetadata
"""

from datetime import date

import pytest

from booklet_toolkit.core.models.metadata import Metadata, ThemedMetadata


class TestMetadata:
    def test_init_when_negative_spacing_then_clamped_to_zero(self):
        assert Metadata(question_spacing=-12).question_spacing == 0

    def test_init_when_spacing_is_text_then_raises_type_error(self):
        with pytest.raises(TypeError, match="question_spacing"):
            Metadata(question_spacing="wide")

    def test_init_when_no_spacing_then_none(self):
        assert Metadata().question_spacing is None

    def test_custom_fields_when_source_dict_changes_then_metadata_unaffected(self):
        fields = {"schoolName": "Ataturk Lisesi"}
        meta = Metadata(custom_fields=fields)
        fields["schoolName"] = "changed"
        assert meta.custom_fields["schoolName"] == "Ataturk Lisesi"
        with pytest.raises(TypeError):
            meta.custom_fields["x"] = "y"


class TestThemedMetadata:
    def test_from_metadata_when_option_fields_given_then_override_metadata_fields(self):
        # Arrange
        meta = Metadata(test_name="Deneme", custom_fields={"schoolName": "Eski Okul", "term": "1"})

        # Act
        themed = ThemedMetadata.from_metadata(meta, {"school_name": "Yeni Okul"}, issued_on=date(2024, 5, 1))

        # Assert
        assert themed.school_name == "Yeni Okul"
        assert themed.term == "1"
        assert themed.test_name == "Deneme"
        assert themed.date_label == "01.05.2024"

    def test_from_metadata_when_called_then_input_not_mutated(self):
        meta = Metadata(custom_fields={"examCode": "A1"})
        ThemedMetadata.from_metadata(meta, {"studentName": "Ali"})
        assert dict(meta.custom_fields) == {"examCode": "A1"}

    def test_from_metadata_when_camel_case_keys_then_typed_fields_populated(self):
        themed = ThemedMetadata.from_metadata(
            Metadata(),
            {"studentName": "Ali", "studentNumber": "42", "examCode": "YKS-7", "bookletNumber": "B"},
        )
        assert (themed.student_name, themed.student_number, themed.exam_code, themed.booklet_number) == (
            "Ali", "42", "YKS-7", "B",
        )

    def test_from_metadata_when_empty_value_then_field_is_none(self):
        themed = ThemedMetadata.from_metadata(Metadata(), {"schoolName": ""})
        assert themed.school_name is None
