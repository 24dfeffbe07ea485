"""Core FTL parser implementation.

This module provides the main FluentParser class that orchestrates
parsing of FTL sources into AST structures defined in :mod:`ftlcontext.syntax.ast`.

Architecture:
    The parser drives a two-cursor :class:`~ftlcontext.syntax.cursor.ParserStream`
    through the productions in :mod:`~ftlcontext.syntax.parser.rules`. A production
    that cannot continue raises ``ParseError``; the per-entry recovery point
    turns the failed entry into Junk and parsing resumes at the next entry.

AST Types:
    The parser produces a :class:`~ftlcontext.syntax.ast.Resource` containing entries:

    - :class:`~ftlcontext.syntax.ast.Message` - User-visible messages with optional attributes
    - :class:`~ftlcontext.syntax.ast.Term` - Reusable terms (referenced with ``-term`` syntax)
    - :class:`~ftlcontext.syntax.ast.Comment`, ``GroupComment``, ``ResourceComment``
    - :class:`~ftlcontext.syntax.ast.Junk` - Unparseable content (robustness principle)

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large FTL sources.
    A configurable max_nesting_depth turns deeply nested placeables into
    Junk instead of exhausting the Python stack.
"""

import logging
from dataclasses import replace
from typing import TextIO

from ftlcontext.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from ftlcontext.syntax.ast import Comment, Entry, Junk, Message, Resource, Span, Term
from ftlcontext.syntax.cursor import EOF, ParserStream
from ftlcontext.syntax.parser.rules import ParseContext, get_entry_or_junk
from ftlcontext.syntax.parser.whitespace import skip_blank_lines

__all__ = ["FluentParser"]

logger = logging.getLogger(__name__)

# Entry starts skipped by parse_entry() before the first message or term.
_COMMENT_STARTS = ("#", "/", "[")


class FluentParser:
    """FTL parser with per-entry error recovery.

    Attributes:
        with_spans: Whether nodes carry source spans
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed placeable nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_with_spans")

    def __init__(
        self,
        *,
        with_spans: bool = True,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            with_spans: Attach Span(start, end) to parsed nodes.
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable the size limit (not recommended).
            max_nesting_depth: Maximum nesting depth of placeables, call
                            arguments and variant lists (default: 100).
        """
        self._with_spans = with_spans
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def with_spans(self) -> bool:
        """Whether nodes carry source spans."""
        return self._with_spans

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed placeable nesting depth."""
        return self._max_nesting_depth

    def _open(self, source: str | TextIO) -> ParserStream:
        return ParserStream(source, max_size=self._max_source_size or None)

    def _context(self) -> ParseContext:
        return ParseContext(
            with_spans=self._with_spans, max_nesting_depth=self._max_nesting_depth
        )

    def parse(self, source: str | TextIO) -> Resource:
        """Parse FTL source into AST Resource.

        Continues parsing after errors: each malformed entry becomes Junk.
        A Comment directly followed by a Message or Term (no blank line) is
        attached to that entry, whose span then starts at the comment.

        Args:
            source: FTL text, or an open text stream

        Returns:
            Resource spanning the whole input

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            OSError: If reading from the stream fails

        Example:
            >>> parser = FluentParser()
            >>> resource = parser.parse("hello = World")
            >>> message = resource.body[0]
            >>> message.id.name
            'hello'
        """
        ps = self._open(source)
        ctx = self._context()
        skip_blank_lines(ps)

        entries: list[Entry] = []
        last_comment: Comment | None = None

        while ps.current is not EOF:
            entry = get_entry_or_junk(ps, ctx)
            blank_lines = skip_blank_lines(ps)

            # Comments are attached only once the following entry parsed
            # successfully; before Junk they stay standalone.
            if isinstance(entry, Comment) and blank_lines == 0 and ps.current is not EOF:
                last_comment = entry
                continue

            if last_comment is not None:
                if isinstance(entry, Message | Term):
                    entry = _attach_comment(entry, last_comment)
                else:
                    entries.append(last_comment)
                last_comment = None

            entries.append(entry)

        span = Span(0, ps.index) if self._with_spans else None
        resource = Resource(tuple(entries), span)

        if logger.isEnabledFor(logging.DEBUG):
            junk_count = sum(1 for entry in entries if isinstance(entry, Junk))
            logger.debug(
                "Parsed %d entries (%d junk) from %d characters",
                len(entries),
                junk_count,
                ps.index,
            )

        return resource

    def parse_entry(self, source: str | TextIO) -> Entry:
        """Parse the first Message or Term in ``source``.

        Skips leading comments. An invalid comment is returned as Junk
        instead of being skipped.

        Args:
            source: FTL text, or an open text stream

        Returns:
            The first Message or Term, or Junk

        Raises:
            ValueError: If source exceeds max_source_size
        """
        ps = self._open(source)
        ctx = self._context()
        skip_blank_lines(ps)

        while ps.current in _COMMENT_STARTS:
            skipped = get_entry_or_junk(ps, ctx)
            if isinstance(skipped, Junk):
                return skipped
            skip_blank_lines(ps)

        return get_entry_or_junk(ps, ctx)


def _attach_comment[E: (Message, Term)](entry: E, comment: Comment) -> E:
    if entry.span is not None and comment.span is not None:
        return replace(entry, comment=comment, span=Span(comment.span.start, entry.span.end))
    return replace(entry, comment=comment)
