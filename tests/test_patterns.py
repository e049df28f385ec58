"""Tests for file name and text patterns."""

import pytest

from pdftasks.errors import InvalidArgumentError, PatternError
from pdftasks.patterns import compile_glob, compile_regex, matches


class TestCompileGlob:
    """Tests for compile_glob."""

    def test_star_matches_extension_case_insensitive(self):
        regex = compile_glob("*.pdf")
        assert matches(regex, "a.pdf")
        assert matches(regex, "A.PDF")

    def test_full_string_match_only(self):
        regex = compile_glob("*.pdf")
        assert not matches(regex, "a.pdfx")
        assert not matches(regex, "a.pdf.txt")

    def test_comma_separated_fragments(self):
        regex = compile_glob("a.jpg,b.png")
        assert matches(regex, "a.jpg")
        assert matches(regex, "B.PNG")
        assert not matches(regex, "a.png")
        assert not matches(regex, "c.jpg")

    def test_fragments_are_trimmed(self):
        regex = compile_glob(" *.jpg ,  *.png ")
        assert matches(regex, "photo.jpg")
        assert matches(regex, "scan.png")

    def test_question_mark_matches_single_character(self):
        regex = compile_glob("file?.txt")
        assert matches(regex, "file1.txt")
        assert not matches(regex, "file12.txt")
        assert not matches(regex, "file.txt")

    @pytest.mark.parametrize("pattern", [None, "", "   ", " , "])
    def test_empty_pattern_matches_everything(self, pattern):
        regex = compile_glob(pattern)
        for name in ["a.pdf", "", "weird name (1).JPG", "line\nbreak"]:
            assert matches(regex, name)

    def test_regex_metacharacters_are_literal(self):
        regex = compile_glob("a+b(1).txt")
        assert matches(regex, "a+b(1).txt")
        assert not matches(regex, "aab1.txt")

    def test_dot_is_literal(self):
        assert not matches(compile_glob("a.txt"), "abtxt")


class TestCompileRegex:
    """Tests for compile_regex."""

    def test_valid_pattern(self):
        assert compile_regex(r"\{(.*?)\}").search('x {name:"A"} y').group(0) == '{name:"A"}'

    def test_invalid_pattern_raises_pattern_error(self):
        with pytest.raises(PatternError) as excinfo:
            compile_regex("(unclosed")
        assert excinfo.value.pattern == "(unclosed"
        assert isinstance(excinfo.value, ValueError)

    def test_none_pattern(self):
        with pytest.raises(InvalidArgumentError):
            compile_regex(None)
