"""Line lookahead for the FTL parser.

Each predicate looks at the line after the peek cursor to classify it as a
pattern continuation, attribute, variant or comment. Every predicate resets
the peek cursor before returning, so none of them moves the commit cursor.

``skip_to_next_entry_start`` is the error-recovery scan used after a failed
entry.
"""

from ftlcontext.enums import CommentLevel
from ftlcontext.syntax.cursor import EOF, Char, ParserStream

from .primitives import is_identifier_start
from .whitespace import is_peek_newline, peek_blank_lines, peek_inline_ws

__all__ = [
    "is_char_pattern_continuation",
    "is_peek_next_line_attribute_start",
    "is_peek_next_line_comment",
    "is_peek_next_line_legacy_comment",
    "is_peek_next_line_value",
    "is_peek_next_line_variant_start",
    "is_peek_value_start",
    "skip_to_next_entry_start",
]

# Characters that cannot open a continuation line of a pattern:
# "}" closes a variant list, "." starts an attribute, "[" and "*" a variant.
_NON_CONTINUATION = frozenset("}.[*")


def is_char_pattern_continuation(ch: Char) -> bool:
    return ch is not EOF and ch not in _NON_CONTINUATION


def _peek_indented_next_line(ps: ParserStream) -> bool:
    """Move the peek cursor to the first non-blank char of the next indented line.

    Returns False, with the peek cursor reset, when there is no line break
    under the peek cursor or the next non-blank line is not indented.
    """
    if not is_peek_newline(ps):
        ps.reset_peek()
        return False

    ps.peek()
    peek_blank_lines(ps)

    line_start = ps.peek_index
    peek_inline_ws(ps)

    if ps.peek_index == line_start:
        ps.reset_peek()
        return False
    return True


def is_peek_value_start(ps: ParserStream) -> bool:
    """Check whether a value follows, inline or on an indented next line.

    Leaves the peek cursor past inline whitespace when the value is inline.
    """
    peek_inline_ws(ps)
    ch = ps.current_peek

    if ch is not EOF and not is_peek_newline(ps):
        return True

    return is_peek_next_line_value(ps)


def is_peek_next_line_value(ps: ParserStream) -> bool:
    """Check for an indented line that continues the current pattern."""
    if not _peek_indented_next_line(ps):
        return False

    result = is_char_pattern_continuation(ps.current_peek)
    ps.reset_peek()
    return result


def is_peek_next_line_attribute_start(ps: ParserStream) -> bool:
    """Check for an indented ``.attribute`` line."""
    if not _peek_indented_next_line(ps):
        return False

    result = ps.current_peek_is(".")
    ps.reset_peek()
    return result


def is_peek_next_line_variant_start(ps: ParserStream) -> bool:
    """Check for an indented ``[key]`` or ``*[key]`` line.

    ``[[`` opens a legacy section header, not a variant.
    """
    if not _peek_indented_next_line(ps):
        return False

    if ps.current_peek_is("*"):
        ps.peek()

    result = ps.current_peek_is("[") and not ps.peek_char_is("[")
    ps.reset_peek()
    return result


def is_peek_next_line_comment(ps: ParserStream, level: CommentLevel | None = None) -> bool:
    """Check whether the next line is a comment line.

    Args:
        ps: Parser stream
        level: Required comment level, or None for any level

    Returns:
        True if the next line opens with the right number of ``#`` followed
        by a space or a line ending
    """
    if not is_peek_newline(ps):
        ps.reset_peek()
        return False

    max_hashes = 3 if level is None else level + 1
    hashes = 0
    ps.peek()
    while hashes < max_hashes and ps.current_peek_is("#"):
        hashes += 1
        ps.peek()

    if hashes == 0 or (level is not None and hashes != max_hashes):
        ps.reset_peek()
        return False

    result = ps.current_peek in (" ", "\r", "\n", EOF)
    ps.reset_peek()
    return result


def is_peek_next_line_legacy_comment(ps: ParserStream) -> bool:
    """Check whether the next line opens with ``//``."""
    if not is_peek_newline(ps):
        ps.reset_peek()
        return False

    ps.peek()
    result = ps.current_peek_is("/") and ps.peek_char_is("/")
    ps.reset_peek()
    return result


def _is_entry_start_line(ps: ParserStream) -> bool:
    ch = ps.current
    if ch is EOF or ch in ("-", "#"):
        return True
    if ch in ("/", "["):
        result = ps.peek_char_is(ch)
        ps.reset_peek()
        return result
    return is_identifier_start(ps)


def skip_to_next_entry_start(ps: ParserStream) -> None:
    """Commit characters until a line opens with something that can start an entry.

    Entry starts are ``[a-zA-Z]``, ``-``, ``#``, ``//`` and ``[[``, or EOF.
    """
    while ps.current is not EOF:
        if ps.current in ("\r", "\n"):
            is_cr = ps.current_is("\r")
            ps.next()
            if is_cr and ps.current_is("\n"):
                ps.next()
            if ps.current not in ("\r", "\n") and _is_entry_start_line(ps):
                break
        else:
            ps.next()
