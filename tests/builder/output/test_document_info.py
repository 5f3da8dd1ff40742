"""
Tests for builder.output.metadata (PDF document information)
"""

from unittest.mock import MagicMock

from booklet_toolkit.builder.output import DocumentInfo, document_info, stamp_document_info
from booklet_toolkit.core.models import Metadata


class TestDocumentInfo:
    def test_document_info_when_turkish_values_then_ascii(self, sample_metadata):
        info = document_info(sample_metadata, creator="Akıllı Test", producer="PDF Test Generator v1.0")

        assert info.title == "Deneme Sinavi 1"
        assert info.author == "Ayse Yilmaz"
        assert info.subject == "Matematik - 9-A"
        assert info.creator == "Akilli Test"
        assert info.keywords is None

    def test_document_info_when_fields_missing_then_defaults(self):
        info = document_info(Metadata(), creator="c", producer="p")

        assert info.title == "Test"
        assert info.author == "Test Olusturucu"
        assert info.subject == "Ders - Sinif"

    def test_document_info_when_keywords_then_kept(self, sample_metadata):
        info = document_info(sample_metadata, creator="c", producer="p", keywords="AnswerKey:1:A")
        assert info.keywords == "AnswerKey:1:A"


class TestStampDocumentInfo:
    def test_stamp_when_no_keywords_then_keywords_not_set(self):
        c = MagicMock()

        stamp_document_info(c, DocumentInfo("T", "A", "S", "C", "P"))

        c.setTitle.assert_called_once_with("T")
        c.setAuthor.assert_called_once_with("A")
        c.setSubject.assert_called_once_with("S")
        c.setCreator.assert_called_once_with("C")
        c.setProducer.assert_called_once_with("P")
        c.setKeywords.assert_not_called()

    def test_stamp_when_keywords_then_set(self):
        c = MagicMock()
        stamp_document_info(c, DocumentInfo("T", "A", "S", "C", "P", keywords="AnswerKey:1:B"))
        c.setKeywords.assert_called_once_with("AnswerKey:1:B")
