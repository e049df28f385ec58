"""Tests for locating text matches in PDF pages."""

import pytest

from pdftasks.errors import InvalidArgumentError, PatternError
from pdftasks.extractor import TextFragment, TextLocationExtractor, TextMatch
from pdf_factory import make_pdf, owner_restricted


@pytest.fixture(scope="module")
def sample_pdf() -> bytes:
    return make_pdf([
        ["This is a test document used for unit testing of PDF", "Watermarks are not text"],
        ["Second page without the word"],
        ["Another Test line", "and one more test"],
    ])


class TestLocate:

    def test_matches_in_page_order(self, sample_pdf):
        matches = TextLocationExtractor(r"(?i)\btest\b").locate(sample_pdf)
        assert matches == [
            TextMatch(page=1, text="test"),
            TextMatch(page=3, text="Test"),
            TextMatch(page=3, text="test"),
        ]

    def test_full_line_match(self, sample_pdf):
        pattern = "This is a test document used for unit testing of PDF"
        matches = TextLocationExtractor(pattern).locate(sample_pdf)
        assert matches == [TextMatch(page=1, text=pattern)]

    def test_no_matches(self, sample_pdf):
        assert TextLocationExtractor(r'\{name:"DummyPattern"').locate(sample_pdf) == []

    def test_empty_matches_are_skipped(self, sample_pdf):
        assert TextLocationExtractor(r"z*").locate(sample_pdf) == []

    def test_invalid_pattern_fails_before_reading(self):
        with pytest.raises(PatternError):
            TextLocationExtractor("[unclosed").locate(b"not even a pdf")

    def test_none_document(self):
        with pytest.raises(InvalidArgumentError):
            TextLocationExtractor("x").locate(None)

    def test_owner_restricted_document(self, sample_pdf):
        restricted = owner_restricted(sample_pdf)
        assert TextLocationExtractor(r"(?i)\btest\b").locate(restricted) == [
            TextMatch(page=1, text="test"),
            TextMatch(page=3, text="Test"),
            TextMatch(page=3, text="test"),
        ]

    def test_decoder_order_is_kept(self, sample_pdf):
        def decoder(page):
            # Deliberately not top-to-bottom
            return [
                TextFragment("marker B", (0, 500, 10, 510)),
                TextFragment("marker A", (0, 100, 10, 110)),
            ]

        matches = TextLocationExtractor(r"marker \w", decoder=decoder).locate(sample_pdf)
        assert [m.text for m in matches[:2]] == ["marker B", "marker A"]
        assert [m.page for m in matches] == [1, 1, 2, 2, 3, 3]

    def test_matches_do_not_span_fragments(self, sample_pdf):
        # Both lines of page 1 concatenated would contain "PDFWatermarks"
        assert TextLocationExtractor("PDF ?Watermarks").locate(sample_pdf) == []


class TestExtractText:

    def test_concatenates_matches(self, sample_pdf):
        assert TextLocationExtractor("test").extract_text(sample_pdf) == "testtesttest"

    def test_single_match(self, sample_pdf):
        assert TextLocationExtractor("Watermarks").extract_text(sample_pdf) == "Watermarks"

    def test_no_match_is_empty_string(self, sample_pdf):
        assert TextLocationExtractor("nothing here").extract_text(sample_pdf) == ""
