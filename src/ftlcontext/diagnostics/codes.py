"""Diagnostic codes and data structures.

Defines parse error codes (E0001-E0027), resolution diagnostic codes,
source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, StrEnum

__all__ = [
    "PARSE_ERROR_MESSAGES",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
    "get_error_message",
]


class ErrorCategory(StrEnum):
    """Error categorization for Fluent errors.

    Inherits from ``StrEnum`` so that ``str(category)`` and direct string
    comparisons work without accessing ``.value``; log aggregation receives
    plain strings (``"reference"``, ``"range"``, etc.).

    Categories:
        REFERENCE: Unknown message, term, attribute, variant, variable or function
        TYPE: Variable or function argument of an unsupported shape
        RANGE: Cyclic pattern, missing default variant, oversize placeable,
            too deep nesting
        OVERRIDE: Duplicate message or term identifier rejected by the store
        PARSE: Syntax error recovered as Junk
    """

    REFERENCE = "reference"
    TYPE = "type"
    RANGE = "range"
    OVERRIDE = "override"
    PARSE = "parse"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (missing messages, terms, variables)
        2000-2999: Type and range errors (runtime evaluation failures)
        3000-3999: Syntax errors (parser failures)
        5000-5999: Store errors (resource registration)
    """

    # Reference errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    ATTRIBUTE_NOT_FOUND = 1002
    TERM_NOT_FOUND = 1003
    VARIABLE_NOT_PROVIDED = 1005
    MESSAGE_NO_VALUE = 1006
    VARIANT_NOT_FOUND = 1007
    FUNCTION_NOT_FOUND = 1008

    # Type and range errors (2000-2999)
    CYCLIC_REFERENCE = 2001
    NO_DEFAULT_VARIANT = 2002
    FUNCTION_FAILED = 2004
    TYPE_MISMATCH = 2006
    MAX_DEPTH_EXCEEDED = 2010
    PLACEABLE_TOO_LONG = 2015

    # Syntax errors (3000-3999)
    PARSE_JUNK = 3004

    # Store errors (5000-5999)
    DUPLICATE_ID = 5102

    @property
    def category(self) -> ErrorCategory:
        """Category this code reports under."""
        match self:
            case DiagnosticCode.PARSE_JUNK:
                return ErrorCategory.PARSE
            case DiagnosticCode.DUPLICATE_ID:
                return ErrorCategory.OVERRIDE
            case DiagnosticCode.FUNCTION_FAILED | DiagnosticCode.TYPE_MISMATCH:
                return ErrorCategory.TYPE
            case (
                DiagnosticCode.CYCLIC_REFERENCE
                | DiagnosticCode.NO_DEFAULT_VARIANT
                | DiagnosticCode.PLACEABLE_TOO_LONG
                | DiagnosticCode.MESSAGE_NO_VALUE
                | DiagnosticCode.MAX_DEPTH_EXCEEDED
            ):
                return ErrorCategory.RANGE
            case _:
                return ErrorCategory.REFERENCE


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[MESSAGE_NOT_FOUND]: Unknown message: hello
              --> line 5, column 10
              = help: Check that the message is defined in the loaded resources

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.span is not None:
            lines.append(f"  --> line {self.span.line}, column {self.span.column}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)


# ============================================================================
# PARSE ERROR CODES
# ============================================================================

# Annotation codes carried by Junk. Positional placeholders are filled from
# the ParseError arguments.
PARSE_ERROR_MESSAGES: dict[str, str] = {
    "E0001": "Generic error",
    "E0002": "Expected an entry start",
    "E0003": 'Expected token: "{0}"',
    "E0004": 'Expected a character from range: "{0}"',
    "E0005": 'Expected message "{0}" to have a value or attributes',
    "E0006": 'Expected term "{0}" to have a value',
    "E0007": "Keyword cannot end with a whitespace",
    "E0008": "The callee has to be a simple, upper-case identifier",
    "E0009": "The key has to be a simple identifier",
    "E0010": "Expected one of the variants to be marked as default (*)",
    "E0011": 'Expected at least one variant after "->"',
    "E0012": "Expected value",
    "E0013": "Expected variant key",
    "E0014": "Expected literal",
    "E0015": "Only one variant can be marked as default (*)",
    "E0016": "Message references cannot be used as selectors",
    "E0017": "Variants cannot be used as selectors",
    "E0018": "Attributes of messages cannot be used as selectors",
    "E0019": "Attributes of terms cannot be used as placeables",
    "E0020": "Unterminated string expression",
    "E0021": "Positional arguments must not follow named arguments",
    "E0022": "Named arguments must be unique",
    "E0023": "VariantLists are only allowed inside of other VariantLists.",
    "E0024": "Cannot access variants of a message.",
    "E0025": "Unknown escape sequence: \\{0}.",
    "E0026": "Invalid Unicode escape sequence: \\u{0}.",
    "E0027": "Expressions cannot be nested more than {0} levels deep",
}


def get_error_message(code: str, args: Sequence[str] = ()) -> str:
    """Render the human message for a parse error code.

    Unknown codes render as the code itself.

    Example:
        >>> get_error_message("E0003", ["="])
        'Expected token: "="'
        >>> get_error_message("E9999")
        'E9999'
    """
    template = PARSE_ERROR_MESSAGES.get(code)
    if template is None:
        return code
    return template.format(*args)
