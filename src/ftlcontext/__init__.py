"""ftlcontext - Fluent (FTL) localization with a message context.

Parses FTL resources into an AST, stores their messages and terms in a
MessageContext, and formats them with locale-aware plural selection and
number and date formatting.

Public API:
    MessageContext - Message store and formatter for one language
    FluentResource - Parsed FTL source with its syntax errors
    parse_ftl - Parse FTL source to AST
    serialize_ftl - Serialize AST to FTL source

Exceptions:
    FluentError - Base exception class
    FluentParseError - Syntax errors surfaced for Junk entries
    FluentReferenceError - Unknown message/term/variable references
    FluentTypeError - Unsupported variable or function argument types
    FluentRangeError - Cycles, missing defaults, oversized placeables
    FluentOverrideError - Duplicate message or term ids

Submodules:
    ftlcontext.syntax.ast - AST node types (Resource, Message, Term, Pattern, etc.)
    ftlcontext.syntax.cursor - Two-cursor parser stream
    ftlcontext.runtime.value_types - FluentNumber, FluentDateTime and friends
    ftlcontext.diagnostics - Error codes, templates and exceptions
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    FluentError,
    FluentOverrideError,
    FluentParseError,
    FluentRangeError,
    FluentReferenceError,
    FluentTypeError,
)
from .runtime import FluentResource, MessageContext
from .runtime.value_types import FluentArg
from .syntax import parse as parse_ftl
from .syntax import serialize as serialize_ftl

try:
    __version__ = _get_version("ftlcontext")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Syntax version implemented by the parser
__fluent_syntax_version__ = "0.6"

__all__ = [
    "FluentArg",
    "FluentError",
    "FluentOverrideError",
    "FluentParseError",
    "FluentRangeError",
    "FluentReferenceError",
    "FluentResource",
    "FluentTypeError",
    "MessageContext",
    "__fluent_syntax_version__",
    "__version__",
    "parse_ftl",
    "serialize_ftl",
]
