"""Diagnostic system for Fluent errors.

Provides parse error codes, structured diagnostics with hints, and the
exception hierarchy shared by the parser, the resolver and the store.

Python 3.13+. Zero external dependencies.
"""

from .codes import (
    PARSE_ERROR_MESSAGES,
    Diagnostic,
    DiagnosticCode,
    ErrorCategory,
    SourceSpan,
    get_error_message,
)
from .errors import (
    FluentCyclicReferenceError,
    FluentError,
    FluentOverrideError,
    FluentParseError,
    FluentRangeError,
    FluentReferenceError,
    FluentTypeError,
    ParseError,
)
from .templates import ErrorTemplate

__all__ = [
    "PARSE_ERROR_MESSAGES",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "ErrorTemplate",
    "FluentCyclicReferenceError",
    "FluentError",
    "FluentOverrideError",
    "FluentParseError",
    "FluentRangeError",
    "FluentReferenceError",
    "FluentTypeError",
    "ParseError",
    "SourceSpan",
    "get_error_message",
]
