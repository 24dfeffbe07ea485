"""Primitive parsing utilities for the FTL parser.

This module provides the character classes of the FTL grammar and the
single-character takers built on them.

Takers return the consumed character, or EOF when the current character
does not belong to the class. ``take_id_start`` and ``expect_char`` raise
``ParseError`` instead, because a missing character there ends the entry.
"""

from collections.abc import Callable

from ftlcontext.diagnostics import ParseError
from ftlcontext.syntax.cursor import EOF, Char, ParserStream

__all__ = [
    "expect_char",
    "is_char_id_start",
    "is_digit",
    "is_hex_digit",
    "is_id_char",
    "is_identifier_start",
    "is_number_start",
    "is_variant_name_char",
    "take_char",
    "take_digit",
    "take_hex_digit",
    "take_id_char",
    "take_id_start",
    "take_variant_name_char",
    "trim_right",
]

# ASCII only. str.isdigit() accepts Unicode digits such as "²".
_ASCII_DIGITS: str = "0123456789"
_HEX_DIGITS: str = "0123456789abcdefABCDEF"

_TRAILING_WHITE: str = " \t\r\n"


def is_char_id_start(ch: Char) -> bool:
    """Check for ``[a-zA-Z]``."""
    return ch is not EOF and len(ch) == 1 and ch.isascii() and ch.isalpha()


def is_id_char(ch: Char) -> bool:
    """Check for ``[a-zA-Z0-9_-]``."""
    return is_char_id_start(ch) or is_digit(ch) or ch in ("_", "-")


def is_variant_name_char(ch: Char) -> bool:
    """Identifier characters plus an inner space (``[one hundred]``)."""
    return is_id_char(ch) or ch == " "


def is_digit(ch: Char) -> bool:
    return ch is not EOF and len(ch) == 1 and ch in _ASCII_DIGITS


def is_hex_digit(ch: Char) -> bool:
    return ch is not EOF and len(ch) == 1 and ch in _HEX_DIGITS


def take_char(ps: ParserStream, predicate: Callable[[Char], bool]) -> Char:
    """Consume the current character if ``predicate`` accepts it.

    Returns:
        The consumed character, or EOF when nothing was consumed
    """
    ch = ps.current
    if ch is not EOF and predicate(ch):
        ps.next()
        return ch
    return EOF


def take_id_start(ps: ParserStream) -> str:
    """Consume the first character of an identifier.

    Raises:
        ParseError: E0004 when the current character is not ``[a-zA-Z]``
    """
    ch = ps.current
    if ch is not EOF and is_char_id_start(ch):
        ps.next()
        return ch
    raise ParseError("E0004", "a-zA-Z")


def take_id_char(ps: ParserStream) -> Char:
    return take_char(ps, is_id_char)


def take_variant_name_char(ps: ParserStream) -> Char:
    return take_char(ps, is_variant_name_char)


def take_digit(ps: ParserStream) -> Char:
    return take_char(ps, is_digit)


def take_hex_digit(ps: ParserStream) -> Char:
    return take_char(ps, is_hex_digit)


def expect_char(ps: ParserStream, ch: str) -> None:
    """Consume exactly ``ch``.

    Line endings have their own helpers (``expect_newline``, ``expect_indent``)
    because they may be one or two characters long.

    Raises:
        ValueError: If called with a line ending
        ParseError: E0003 when the current character differs
    """
    if ch in ("\n", "\r"):
        msg = "expect_char() cannot match a line ending, use expect_newline()"
        raise ValueError(msg)

    if ps.current == ch:
        ps.next()
        return

    raise ParseError("E0003", ch)


def is_identifier_start(ps: ParserStream) -> bool:
    """Check whether an identifier starts under the peek cursor."""
    result = is_char_id_start(ps.current_peek)
    ps.reset_peek()
    return result


def is_number_start(ps: ParserStream) -> bool:
    """Check for a digit, or ``-`` followed by a digit."""
    ch = ps.peek() if ps.current_is("-") else ps.current
    result = is_digit(ch)
    ps.reset_peek()
    return result


def trim_right(text: str) -> str:
    """Strip trailing spaces, tabs and line endings."""
    return text.rstrip(_TRAILING_WHITE)
