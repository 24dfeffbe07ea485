"""Fluent exception hierarchy with structured diagnostics.

Two channels use this hierarchy:

- Parse time: ``ParseError`` is raised inside the parser and caught at the
  per-entry recovery point, where it becomes a Junk annotation. The store
  surfaces those annotations as ``FluentParseError``.
- Resolution time: ``FluentReferenceError``, ``FluentTypeError`` and
  ``FluentRangeError`` are appended to the caller's error list and never
  raised by the resolver.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic, ErrorCategory, SourceSpan, get_error_message

__all__ = [
    "FluentCyclicReferenceError",
    "FluentError",
    "FluentOverrideError",
    "FluentParseError",
    "FluentRangeError",
    "FluentReferenceError",
    "FluentTypeError",
    "ParseError",
]


class FluentError(Exception):
    """Base exception for all Fluent errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    category: ErrorCategory | None = None

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FluentError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def message(self) -> str:
        """Plain error message without diagnostic decoration."""
        return str(self)


class ParseError(FluentError):
    """Syntax failure raised inside a parser production.

    Carries an annotation code (E0001-E0026) and its positional arguments.
    Caught only at the per-entry recovery point and turned into Junk;
    never propagates out of ``FluentParser.parse``.
    """

    category = ErrorCategory.PARSE

    def __init__(self, code: str, *args: str) -> None:
        self.code = code
        self.arguments = tuple(args)
        super().__init__(get_error_message(code, self.arguments))


class FluentParseError(FluentError):
    """Syntax error surfaced by the store for a Junk entry.

    Attributes:
        code: Annotation code (E0001-E0026)
        arguments: Annotation arguments
        span: Location of the failure in the parsed source
    """

    category = ErrorCategory.PARSE

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        code: str = "E0001",
        args: Sequence[str] = (),
        span: SourceSpan | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.arguments = tuple(args)
        self.span = span


class FluentReferenceError(FluentError):
    """Unknown message, term, attribute, variant, variable or function.

    Fallback: the reference renders as its bare name.
    """

    category = ErrorCategory.REFERENCE


class FluentTypeError(FluentError):
    """Variable or function argument of an unsupported type.

    Also reported when a custom function raises TypeError or ValueError.
    """

    category = ErrorCategory.TYPE


class FluentRangeError(FluentError):
    """Value outside what the resolver can produce.

    Examples:
    - Select expression without a usable default variant
    - Placeable output longer than the allowed maximum
    - Message without a value referenced from a placeable
    """

    category = ErrorCategory.RANGE


class FluentCyclicReferenceError(FluentRangeError):
    """Cyclic reference detected (pattern reached again while resolving itself).

    Example:
        hello = { hello }  <- Infinite loop!

    Fallback: the cyclic placeable renders as "???".
    """


class FluentOverrideError(FluentError):
    """Attempt to add a message or term whose identifier is already stored.

    The first definition is kept.
    """

    category = ErrorCategory.OVERRIDE
