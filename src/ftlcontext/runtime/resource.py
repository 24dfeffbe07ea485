"""FluentResource - a parsed FTL source ready to be added to a context.

Splits the parsed entries into messages and terms, and turns every Junk
annotation into a FluentParseError that points at the failure position.

Python 3.13+.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TextIO

from ftlcontext.diagnostics import (
    ErrorTemplate,
    FluentError,
    FluentOverrideError,
    FluentParseError,
    SourceSpan,
)
from ftlcontext.enums import ReferenceKind
from ftlcontext.syntax.ast import Annotation, Junk, Message, Resource, Term
from ftlcontext.syntax.parser import FluentParser
from ftlcontext.syntax.position import (
    column_offset,
    format_position,
    get_error_context,
    line_offset,
)

__all__ = ["FluentResource"]

logger = logging.getLogger(__name__)


class FluentResource:
    """Messages, terms and syntax errors of one FTL source.

    Within a resource the first definition of an id wins; later ones are
    reported as FluentOverrideError and dropped.

    Attributes:
        resource: The parsed AST
        messages: Messages by id
        terms: Terms by id, including the leading ``-``
        junk: Entries that failed to parse
        errors: Syntax and duplicate-id errors, in source order

    Example:
        >>> res = FluentResource.from_string("hello = Hello\\nbad = ")
        >>> list(res.messages)
        ['hello']
        >>> res.errors[0].code
        'E0005'
    """

    __slots__ = ("_errors", "_junk", "_messages", "_resource", "_terms")

    def __init__(self, resource: Resource, source: str = "") -> None:
        """Build from an already parsed Resource.

        Args:
            resource: Parsed AST
            source: Text the AST was parsed from, used for line/column of
                syntax errors. Without it errors carry no span.
        """
        self._resource = resource
        messages: dict[str, Message] = {}
        terms: dict[str, Term] = {}
        junk: list[Junk] = []
        errors: list[FluentError] = []

        for entry in resource.body:
            match entry:
                case Message():
                    _add_entry(messages, entry, ReferenceKind.MESSAGE, errors)
                case Term():
                    _add_entry(terms, entry, ReferenceKind.TERM, errors)
                case Junk():
                    junk.append(entry)
                    errors.extend(_parse_error(a, source) for a in entry.annotations)
                case _:
                    pass

        self._messages = MappingProxyType(messages)
        self._terms = MappingProxyType(terms)
        self._junk = tuple(junk)
        self._errors = tuple(errors)

    @classmethod
    def from_string(cls, source: str, *, parser: FluentParser | None = None) -> "FluentResource":
        """Parse FTL text.

        Raises:
            ValueError: If source exceeds the parser's size limit
        """
        return cls((parser or FluentParser()).parse(source), source)

    @classmethod
    def from_reader(
        cls, reader: TextIO, *, parser: FluentParser | None = None
    ) -> "FluentResource":
        """Parse FTL read from an open text stream.

        Raises:
            OSError: If reading fails
            ValueError: If the text exceeds the parser's size limit
        """
        return cls.from_string(reader.read(), parser=parser)

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def messages(self) -> Mapping[str, Message]:
        return self._messages

    @property
    def terms(self) -> Mapping[str, Term]:
        return self._terms

    @property
    def junk(self) -> tuple[Junk, ...]:
        return self._junk

    @property
    def errors(self) -> tuple[FluentError, ...]:
        return self._errors

    def __repr__(self) -> str:
        return (
            f"FluentResource(messages={len(self._messages)}, "
            f"terms={len(self._terms)}, junk={len(self._junk)})"
        )


def _add_entry[E: (Message, Term)](
    entries: dict[str, E], entry: E, kind: ReferenceKind, errors: list[FluentError]
) -> None:
    entry_id = entry.id.name
    if entry_id in entries:
        logger.debug("Duplicate %s in resource: %s", kind, entry_id)
        errors.append(FluentOverrideError(ErrorTemplate.duplicate_entry(kind, entry_id)))
        return
    entries[entry_id] = entry


def _parse_error(annotation: Annotation, source: str) -> FluentParseError:
    span = None
    if annotation.span is not None and source:
        start, end = annotation.span.start, annotation.span.end
        span = SourceSpan(
            start=start,
            end=end,
            line=line_offset(source, start) + 1,
            column=column_offset(source, start) + 1,
        )
        logger.debug(
            "%s at %s:\n%s",
            annotation.code,
            format_position(source, start, zero_based=False),
            get_error_context(source, start),
        )
    return FluentParseError(
        ErrorTemplate.parse_junk(annotation.code, annotation.args, span),
        code=annotation.code,
        args=annotation.args,
        span=span,
    )
