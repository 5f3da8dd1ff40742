"""
Unit Tests for Text Utilities
"""

from datetime import date

import pytest

from booklet_toolkit.core.utils.text import generate_test_filename, sanitize_text


class TestSanitizeText:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Öğretmen Şükrü Işık", "Ogretmen Sukru Isik"),
            ("İSTANBUL çğü", "ISTANBUL cgu"),
            ("Café naïve", "Cafe naive"),
            ("tab\there", "tabhere"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_sanitize_when_non_ascii_then_transliterated(self, raw, expected):
        assert sanitize_text(raw) == expected

    def test_sanitize_when_any_input_then_output_is_ascii(self):
        assert sanitize_text("Sınıf 9/A – Türkçe ✓").isascii()


class TestGenerateTestFilename:
    def test_filename_when_all_parts_given_then_joined_with_date(self):
        name = generate_test_filename("9-A", "Matematik", "Deneme 1", on=date(2024, 5, 1))
        assert name == "9-A_Matematik_Deneme-1_2024-05-01.pdf"

    def test_filename_when_parts_missing_then_defaults_used(self):
        name = generate_test_filename(None, "", None, on=date(2024, 1, 2))
        assert name == "Sinif_Ders_Test_2024-01-02.pdf"

    def test_filename_when_turkish_then_ascii(self):
        name = generate_test_filename("10/B", "Türk Dili", "Yazılı", on=date(2024, 1, 2))
        assert name.isascii()
        assert "/" not in name
