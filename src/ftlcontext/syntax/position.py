"""Position utilities for FTL source code.

Provides the ``Position`` value reported by the parser stream and helper
functions for converting character offsets to line/column positions for
error reporting and logs.

Line endings: LF, CRLF and a lone CR each end a line, matching how the
parser stream counts lines.
"""

import re
from dataclasses import dataclass

__all__ = [
    "Position",
    "column_offset",
    "format_position",
    "get_error_context",
    "line_offset",
]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Location of the commit cursor in a parsed source.

    Attributes:
        offset: Characters consumed so far (0-based)
        line: Line number (1-based)
        column: Column number (1-based)
    """

    offset: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def _line_starts(source: str, end: int) -> list[int]:
    """Offsets at which lines begin, up to ``end``."""
    starts = [0]
    starts.extend(match.end() for match in _LINE_BREAK.finditer(source, 0, end))
    return starts


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Args:
        source: Complete FTL source text
        pos: Character offset in source

    Returns:
        0-based line number

    Example:
        >>> source = "line1\\nline2\\r\\nline3"
        >>> line_offset(source, 0)
        0
        >>> line_offset(source, 6)
        1
        >>> line_offset(source, 13)
        2
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    return len(_line_starts(source, pos)) - 1


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column number from character offset.

    Example:
        >>> column_offset("hello\\nworld", 2)
        2
        >>> column_offset("hello\\nworld", 6)
        0
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    return pos - _line_starts(source, pos)[-1]


def format_position(source: str, pos: int, zero_based: bool = True) -> str:
    """Format position as human-readable line:column string.

    Example:
        >>> source = "hello\\nworld\\ntest"
        >>> format_position(source, 6, zero_based=True)
        '1:0'
        >>> format_position(source, 6, zero_based=False)
        '2:1'
    """
    line = line_offset(source, pos)
    col = column_offset(source, pos)

    if not zero_based:
        line += 1
        col += 1

    return f"{line}:{col}"


def get_error_context(source: str, pos: int, context_lines: int = 2, marker: str = "^") -> str:
    """Get formatted error context showing position in source.

    Creates a multi-line string showing the error location with
    surrounding context lines and a marker pointing to the error.

    Args:
        source: Complete FTL source text
        pos: Character offset of error
        context_lines: Number of lines to show before/after error
        marker: Character to use for error marker

    Returns:
        Formatted error context string

    Example:
        >>> source = "line1\\nline2\\nerror here\\nline4\\nline5"
        >>> print(get_error_context(source, 12, context_lines=1))
        line2
        error here
        ^
        line4
    """
    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)

    lines = _LINE_BREAK.split(source)

    start_line = max(0, line_num - context_lines)
    end_line = min(len(lines), line_num + context_lines + 1)

    context = []
    for i in range(start_line, end_line):
        context.append(lines[i])
        if i == line_num:
            context.append(" " * col_num + marker)

    return "\n".join(context)
