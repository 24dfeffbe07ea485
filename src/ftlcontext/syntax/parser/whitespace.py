"""Whitespace handling utilities for the FTL parser.

Inline whitespace is space and tab. Line endings are LF, CRLF or a lone CR.
Peeking helpers move only the peek cursor; skipping helpers commit.
"""

from ftlcontext.diagnostics import ParseError
from ftlcontext.syntax.cursor import Char, ParserStream

from .primitives import expect_char

__all__ = [
    "expect_indent",
    "expect_newline",
    "is_inline_ws",
    "is_peek_newline",
    "is_white",
    "peek_blank_lines",
    "peek_inline_ws",
    "skip_blank_lines",
    "skip_indent",
    "skip_inline_ws",
    "skip_newline",
]

# U+2424 SYMBOL FOR NEWLINE, reported as the expected token
_NEWLINE_SYMBOL = "\u2424"


def is_inline_ws(ch: Char) -> bool:
    return ch in (" ", "\t")


def is_white(ch: Char) -> bool:
    return ch in (" ", "\t", "\r", "\n")


def skip_inline_ws(ps: ParserStream) -> None:
    while is_inline_ws(ps.current):
        ps.next()


def peek_inline_ws(ps: ParserStream) -> None:
    ch = ps.current_peek
    while is_inline_ws(ch):
        ch = ps.peek()


def skip_blank_lines(ps: ParserStream) -> int:
    """Skip lines holding only inline whitespace.

    Stops at the start of the first non-blank line, leaving its leading
    whitespace uncommitted.

    Returns:
        Number of blank lines skipped
    """
    line_count = 0
    while True:
        peek_inline_ws(ps)

        if ps.current_peek in ("\r", "\n"):
            if ps.current_peek_is("\r"):
                peek_index = ps.peek_index
                if ps.peek() != "\n":
                    ps.reset_peek(peek_index)
            ps.skip_to_peek()
            ps.next()
            line_count += 1
        else:
            ps.reset_peek()
            return line_count


def peek_blank_lines(ps: ParserStream) -> None:
    """Move the peek cursor past blank lines, stopping at the next line's start."""
    while True:
        line_start = ps.peek_index

        peek_inline_ws(ps)

        if ps.current_peek in ("\r", "\n"):
            ps.peek()
        else:
            ps.reset_peek(line_start)
            break


def skip_indent(ps: ParserStream) -> None:
    skip_blank_lines(ps)
    skip_inline_ws(ps)


def expect_newline(ps: ParserStream) -> None:
    """Consume one line ending. EOF also counts as a line ending.

    Raises:
        ParseError: E0003 when the current character is not a line ending
    """
    match ps.current:
        case "\r":
            ps.next()
            if ps.current_is("\n"):
                ps.next()
        case "\n":
            ps.next()
        case None:
            pass
        case _:
            raise ParseError("E0003", _NEWLINE_SYMBOL)


def expect_indent(ps: ParserStream) -> None:
    """Consume a line ending, blank lines, and at least one space of indentation."""
    expect_newline(ps)
    skip_blank_lines(ps)
    expect_char(ps, " ")
    skip_inline_ws(ps)


def skip_newline(ps: ParserStream) -> None:
    if ps.current_is("\r"):
        ps.next()
    if ps.current_is("\n"):
        ps.next()


def is_peek_newline(ps: ParserStream) -> bool:
    """Check for a line ending under the peek cursor.

    A CRLF pair moves the peek cursor onto the LF so that one more ``peek()``
    lands on the next line.
    """
    if ps.current_peek_is("\r"):
        peek_index = ps.peek_index
        if ps.peek() != "\n":
            ps.reset_peek(peek_index)
        return True
    return ps.current_peek_is("\n")