"""Tests for the parser's lexical helpers.

Covers character classes, whitespace and line-ending handling, line
lookahead, and the error-recovery scan.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlcontext.diagnostics import ParseError
from ftlcontext.enums import CommentLevel
from ftlcontext.syntax.cursor import EOF, ParserStream
from ftlcontext.syntax.parser.lookahead import (
    is_char_pattern_continuation,
    is_peek_next_line_attribute_start,
    is_peek_next_line_comment,
    is_peek_next_line_legacy_comment,
    is_peek_next_line_value,
    is_peek_next_line_variant_start,
    is_peek_value_start,
    skip_to_next_entry_start,
)
from ftlcontext.syntax.parser.primitives import (
    expect_char,
    is_char_id_start,
    is_digit,
    is_hex_digit,
    is_id_char,
    is_number_start,
    is_variant_name_char,
    take_id_start,
    trim_right,
)
from ftlcontext.syntax.parser.whitespace import (
    expect_indent,
    expect_newline,
    is_peek_newline,
    skip_blank_lines,
    skip_inline_ws,
)

# ============================================================================
# CHARACTER CLASSES
# ============================================================================


class TestCharacterClasses:
    """Test single-character predicates."""

    def test_id_start(self) -> None:
        assert is_char_id_start("a")
        assert is_char_id_start("Z")
        assert not is_char_id_start("1")
        assert not is_char_id_start("-")
        assert not is_char_id_start(EOF)

    def test_id_char(self) -> None:
        for ch in "aZ09_-":
            assert is_id_char(ch)
        assert not is_id_char(" ")
        assert not is_id_char(EOF)

    def test_variant_name_char_allows_space(self) -> None:
        assert is_variant_name_char(" ")
        assert not is_variant_name_char("]")

    def test_digits(self) -> None:
        assert is_digit("7")
        assert not is_digit("a")
        assert is_hex_digit("f")
        assert is_hex_digit("A")
        assert not is_hex_digit("g")
        assert not is_hex_digit(EOF)

    def test_pattern_continuation(self) -> None:
        assert is_char_pattern_continuation("a")
        assert is_char_pattern_continuation("{")
        for ch in "}.[*":
            assert not is_char_pattern_continuation(ch)
        assert not is_char_pattern_continuation(EOF)

    @given(st.characters())
    def test_id_char_is_superset_of_id_start(self, ch: str) -> None:
        """PROPERTY: Every identifier start is also an identifier char."""
        if is_char_id_start(ch):
            assert is_id_char(ch)

    def test_trim_right(self) -> None:
        assert trim_right("abc \t\r\n") == "abc"
        assert trim_right("  abc") == "  abc"


# ============================================================================
# CONSUMING PRIMITIVES
# ============================================================================


class TestPrimitives:
    """Test expect/take helpers."""

    def test_expect_char(self) -> None:
        ps = ParserStream("=x")
        expect_char(ps, "=")

        assert ps.current == "x"

    def test_expect_char_mismatch(self) -> None:
        ps = ParserStream("x")

        with pytest.raises(ParseError) as exc_info:
            expect_char(ps, "=")

        assert exc_info.value.code == "E0003"
        assert exc_info.value.arguments == ("=",)
        assert ps.index == 0

    def test_expect_char_rejects_line_ending(self) -> None:
        with pytest.raises(ValueError, match="expect_newline"):
            expect_char(ParserStream("x"), "\n")

    @pytest.mark.parametrize("ending", ["\n", "\r"])
    def test_expect_char_rejects_matching_line_ending(self, ending: str) -> None:
        ps = ParserStream(f"{ending}x")

        with pytest.raises(ValueError, match="expect_newline"):
            expect_char(ps, ending)
        assert ps.index == 0

    def test_take_id_start(self) -> None:
        ps = ParserStream("ab")

        assert take_id_start(ps) == "a"
        assert ps.current == "b"

    def test_take_id_start_failure(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            take_id_start(ParserStream("1"))

        assert exc_info.value.code == "E0004"
        assert exc_info.value.arguments == ("a-zA-Z",)

    def test_is_number_start(self) -> None:
        assert is_number_start(ParserStream("5"))
        assert is_number_start(ParserStream("-1"))
        assert not is_number_start(ParserStream("-a"))
        assert not is_number_start(ParserStream("a"))

    def test_is_number_start_does_not_move(self) -> None:
        ps = ParserStream("-1")
        is_number_start(ps)

        assert ps.index == 0
        assert ps.peek_index == 0


# ============================================================================
# WHITESPACE
# ============================================================================


class TestWhitespace:
    """Test inline whitespace, blank lines and line endings."""

    def test_skip_inline_ws(self) -> None:
        ps = ParserStream(" \t x")
        skip_inline_ws(ps)

        assert ps.current == "x"

    def test_skip_blank_lines_counts_lines(self) -> None:
        ps = ParserStream("\n\n  \nfoo")

        assert skip_blank_lines(ps) == 3
        assert ps.current == "f"

    def test_skip_blank_lines_keeps_indentation(self) -> None:
        """Leading whitespace of a non-blank line is not committed."""
        ps = ParserStream("  foo")

        assert skip_blank_lines(ps) == 0
        assert ps.index == 0

    def test_skip_blank_lines_crlf(self) -> None:
        ps = ParserStream("\r\n\r\nx")

        assert skip_blank_lines(ps) == 2
        assert ps.current == "x"

    @pytest.mark.parametrize(("source", "after"), [("\nx", "x"), ("\r\nx", "x"), ("\rx", "x")])
    def test_expect_newline(self, source: str, after: str) -> None:
        ps = ParserStream(source)
        expect_newline(ps)

        assert ps.current == after

    def test_expect_newline_accepts_eof(self) -> None:
        ps = ParserStream("")
        expect_newline(ps)

        assert ps.current is EOF

    def test_expect_newline_failure(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            expect_newline(ParserStream("x"))

        assert exc_info.value.code == "E0003"
        assert exc_info.value.arguments == ("\u2424",)

    def test_expect_indent(self) -> None:
        ps = ParserStream("\n\n    x")
        expect_indent(ps)

        assert ps.current == "x"

    def test_expect_indent_requires_space(self) -> None:
        with pytest.raises(ParseError):
            expect_indent(ParserStream("\nx"))

    def test_is_peek_newline_crlf(self) -> None:
        ps = ParserStream("\r\nx")

        assert is_peek_newline(ps)
        assert ps.current_peek == "\n"

    def test_is_peek_newline_false(self) -> None:
        assert not is_peek_newline(ParserStream("x"))


# ============================================================================
# LINE LOOKAHEAD
# ============================================================================


class TestLineLookahead:
    """Test next-line classification. None of it commits."""

    def test_value_start_inline(self) -> None:
        assert is_peek_value_start(ParserStream(" foo"))

    def test_value_start_next_line(self) -> None:
        ps = ParserStream(" \n    foo")

        assert is_peek_value_start(ps)
        assert ps.index == 0

    def test_value_start_unindented_next_line(self) -> None:
        assert not is_peek_value_start(ParserStream(" \nfoo"))

    def test_value_start_attribute_is_not_a_value(self) -> None:
        assert not is_peek_value_start(ParserStream(" \n    .attr = x"))

    def test_value_start_at_eof(self) -> None:
        assert not is_peek_value_start(ParserStream(" "))

    def test_next_line_value_skips_blank_lines(self) -> None:
        assert is_peek_next_line_value(ParserStream("\n\n    more"))

    def test_next_line_value_resets_peek(self) -> None:
        ps = ParserStream("\n    more")
        is_peek_next_line_value(ps)

        assert ps.peek_index == 0

    def test_attribute_start(self) -> None:
        assert is_peek_next_line_attribute_start(ParserStream("\n    .title = x"))
        assert not is_peek_next_line_attribute_start(ParserStream("\n.title = x"))
        assert not is_peek_next_line_attribute_start(ParserStream("\n    title"))

    def test_variant_start(self) -> None:
        assert is_peek_next_line_variant_start(ParserStream("\n   *[a] A"))
        assert is_peek_next_line_variant_start(ParserStream("\n    [b] B"))

    def test_section_is_not_a_variant(self) -> None:
        assert not is_peek_next_line_variant_start(ParserStream("\n    [[section]]"))

    def test_comment_any_level(self) -> None:
        assert is_peek_next_line_comment(ParserStream("\n# c"))
        assert is_peek_next_line_comment(ParserStream("\n### c"))
        assert is_peek_next_line_comment(ParserStream("\n#"))

    def test_comment_requires_space(self) -> None:
        assert not is_peek_next_line_comment(ParserStream("\n#c"))

    def test_comment_level(self) -> None:
        assert is_peek_next_line_comment(ParserStream("\n## c"), CommentLevel.GROUP)
        assert not is_peek_next_line_comment(ParserStream("\n# c"), CommentLevel.GROUP)

    def test_legacy_comment(self) -> None:
        assert is_peek_next_line_legacy_comment(ParserStream("\n// c"))
        assert not is_peek_next_line_legacy_comment(ParserStream("\n/ c"))


# ============================================================================
# ERROR RECOVERY SCAN
# ============================================================================


class TestSkipToNextEntryStart:
    """Test the scan used after a failed entry."""

    def test_stops_at_identifier_line(self) -> None:
        ps = ParserStream("junk here\n  more\nfoo = 1")
        skip_to_next_entry_start(ps)

        assert ps.index == 17
        assert ps.current == "f"

    @pytest.mark.parametrize("start", ["-term = x", "# c", "// c", "[[ section ]]"])
    def test_stops_at_entry_starts(self, start: str) -> None:
        ps = ParserStream(f"bad\n{start}")
        skip_to_next_entry_start(ps)

        assert ps.index == 4

    def test_single_slash_is_not_an_entry_start(self) -> None:
        ps = ParserStream("bad\n/c\nok = 1")
        skip_to_next_entry_start(ps)

        assert ps.current == "o"

    def test_runs_to_eof(self) -> None:
        ps = ParserStream("bad\n  still bad")
        skip_to_next_entry_start(ps)

        assert ps.current is EOF
