"""Tests for whitespace and line-ending normalization."""

import pytest

from doctext.normalize import collapse_whitespace, normalize_line_endings


class TestNormalizeLineEndings:
    def test_crlf_and_bare_cr_become_lf(self):
        assert normalize_line_endings("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_bytes_are_supported(self):
        assert normalize_line_endings(b"a\r\nb\r") == b"a\nb\n"

    def test_crlf_is_one_break_not_two(self):
        assert normalize_line_endings("x\r\n\r\ny") == "x\n\ny"


class TestCollapseWhitespace:
    def test_blank_lines_collapse(self):
        assert collapse_whitespace("one\n\n\ntwo") == "one\ntwo"

    def test_spaces_and_tabs_collapse_to_one_space(self):
        assert collapse_whitespace("a  \t b") == "a b"

    def test_single_tab_is_kept(self):
        assert collapse_whitespace("a\tb") == "a\tb"

    def test_space_before_punctuation_removed(self):
        assert collapse_whitespace("Hello , world !") == "Hello, world!"

    def test_newline_before_punctuation_removed(self):
        assert collapse_whitespace("end\n.") == "end."

    def test_bytes_follow_same_rules(self):
        assert collapse_whitespace(b"a  b\r\n\r\nc ;") == b"a b\nc;"

    @pytest.mark.parametrize(
        "text",
        [
            "Hello  world ,\r\n\r\n\r\nnext\t\tline !",
            "a \n \n b",
            "  leading and trailing  ",
            "tabs\t \tand . dots ..",
            "",
        ],
    )
    def test_idempotent(self, text):
        once = collapse_whitespace(text)
        assert collapse_whitespace(once) == once
