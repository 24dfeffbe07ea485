"""Two-cursor character stream for the FTL parser.

The stream keeps two positions over a lazily read text source:

- the commit cursor (``index``, ``current``), advanced by ``next()``;
- the peek cursor (``peek_index``, ``current_peek``), advanced by ``peek()``
  for speculative lookahead and rewound by ``reset_peek()``.

Characters read ahead by the peek cursor wait in a deque until the commit
cursor reaches them, so nothing is read from the source twice.

Invariant: ``peek_index >= index``.

EOF is the ``EOF`` sentinel (``None``), distinct from every one-character
string. Reading past the end keeps returning it without side effects.

Line Ending Support:
    LF, CRLF and a lone CR each end a line for ``position``. The characters
    themselves are passed through unchanged.

Python 3.13+. Zero external dependencies.
"""

import io
from collections import deque
from typing import Final, TextIO

from .position import Position

__all__ = ["EOF", "Char", "ParserStream"]

EOF: Final = None

type Char = str | None


class ParserStream:
    """Buffered commit/peek cursor pair over a text stream.

    Example:
        >>> ps = ParserStream("abcd")
        >>> ps.current
        'a'
        >>> ps.peek()
        'b'
        >>> ps.current, ps.peek_index
        ('a', 1)
        >>> ps.skip_to_peek()
        >>> ps.current, ps.index
        ('b', 1)
    """

    __slots__ = (
        "_buffer",
        "_capture",
        "_column",
        "_current",
        "_index",
        "_input_end",
        "_last_committed",
        "_line",
        "_max_size",
        "_peek_end",
        "_peek_index",
        "_read_count",
        "_reader",
    )

    def __init__(self, source: str | TextIO, *, max_size: int | None = None) -> None:
        """Open a stream over ``source``.

        Args:
            source: FTL text, or an already-open text stream
            max_size: Maximum number of characters to read (None for no limit)

        Raises:
            ValueError: If the source is longer than ``max_size``
        """
        if isinstance(source, str):
            _check_size(len(source), max_size)
            source = io.StringIO(source)
        self._reader: TextIO = source
        self._max_size = max_size
        self._read_count = 0
        self._buffer: deque[str] = deque()
        self._capture: list[str] | None = None
        self._index = 0
        self._peek_index = 0
        self._line = 1
        self._column = 1
        self._last_committed: Char = EOF
        self._current: Char = self._read()
        self._input_end = self._current is EOF
        self._peek_end = self._input_end

    def _read(self) -> Char:
        ch = self._reader.read(1)
        if not ch:
            return EOF
        self._read_count += 1
        _check_size(self._read_count, self._max_size)
        return ch

    # ------------------------------------------------------------------
    # Commit cursor
    # ------------------------------------------------------------------

    @property
    def current(self) -> Char:
        """Character under the commit cursor, or EOF."""
        return self._current

    @property
    def index(self) -> int:
        """Offset of the commit cursor."""
        return self._index

    @property
    def position(self) -> Position:
        """Offset, line and column of the commit cursor."""
        return Position(self._index, self._line, self._column)

    def current_is(self, ch: Char) -> bool:
        return self._current == ch

    def next(self) -> Char:
        """Commit the current character and move to the next one.

        The committed character is appended to the capture buffer when a
        capture is active. The peek cursor snaps back to the commit cursor.

        Returns:
            The new current character, or EOF
        """
        if self._input_end:
            return EOF

        committed = self._current
        assert committed is not None  # guarded by _input_end
        self._commit(committed)

        self._current = self._buffer.popleft() if self._buffer else self._read()
        self._index += 1

        if self._current is EOF:
            self._input_end = True

        self._peek_index = self._index
        self._peek_end = self._input_end
        return self._current

    def _commit(self, ch: str) -> None:
        if self._capture is not None:
            self._capture.append(ch)
        if ch == "\r" or (ch == "\n" and self._last_committed != "\r"):
            self._line += 1
            self._column = 1
        elif ch != "\n":
            self._column += 1
        self._last_committed = ch

    # ------------------------------------------------------------------
    # Peek cursor
    # ------------------------------------------------------------------

    @property
    def current_peek(self) -> Char:
        """Character under the peek cursor, or EOF."""
        if self._peek_end:
            return EOF
        diff = self._peek_index - self._index
        if diff == 0:
            return self._current
        return self._buffer[diff - 1]

    @property
    def peek_index(self) -> int:
        """Offset of the peek cursor."""
        return self._peek_index

    def current_peek_is(self, ch: Char) -> bool:
        return self.current_peek == ch

    def peek(self) -> Char:
        """Advance the peek cursor by one character.

        Characters read from the source are kept in the read-ahead buffer
        until the commit cursor reaches them.

        Returns:
            The character under the peek cursor, or EOF
        """
        if self._peek_end:
            return EOF

        self._peek_index += 1
        diff = self._peek_index - self._index

        if diff > len(self._buffer):
            ch = self._read()
            if ch is EOF:
                self._peek_end = True
                return EOF
            self._buffer.append(ch)

        return self._buffer[diff - 1]

    def peek_char_is(self, ch: Char) -> bool:
        """Check the character after the peek cursor without moving it."""
        if self._peek_end:
            return False
        result = self.peek()
        self._peek_index -= 1
        self._peek_end = False
        return result == ch

    def reset_peek(self, pos: int | None = None) -> None:
        """Rewind the peek cursor.

        Args:
            pos: Saved peek index to rewind to, or None for the commit cursor
        """
        if pos is None:
            self._peek_index = self._index
            self._peek_end = self._input_end
            return
        if pos < self._peek_index:
            self._peek_end = False
        self._peek_index = pos

    def skip_to_peek(self) -> None:
        """Commit every character up to the peek cursor in one step."""
        diff = self._peek_index - self._index

        if diff > 0:
            assert self._current is not None  # peek_index > index implies input left
            self._commit(self._current)
            for i in range(diff - 1):
                self._commit(self._buffer[i])

            self._current = EOF if diff > len(self._buffer) else self._buffer[diff - 1]
            for _ in range(min(diff, len(self._buffer))):
                self._buffer.popleft()
            if self._current is EOF:
                self._input_end = True
                self._peek_end = True

        self._index = self._peek_index

    # ------------------------------------------------------------------
    # Capture
    # ------------------------------------------------------------------

    def begin_capture(self) -> None:
        """Start recording committed characters, discarding any earlier capture."""
        self._capture = []

    def end_capture(self) -> None:
        self._capture = None

    def captured_text(self) -> str:
        """Text committed since ``begin_capture``, or "" when not capturing."""
        if self._capture is None:
            return ""
        return "".join(self._capture)

    def __repr__(self) -> str:
        return (
            f"ParserStream(index={self._index}, peek_index={self._peek_index}, "
            f"current={self._current!r})"
        )


def _check_size(size: int, max_size: int | None) -> None:
    if max_size is not None and size > max_size:
        msg = f"Source size ({size} characters) exceeds maximum ({max_size} characters)"
        raise ValueError(msg)
