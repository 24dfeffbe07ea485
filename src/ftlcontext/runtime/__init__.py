"""Fluent runtime package.

Provides message resolution, value types, built-in functions, and the
MessageContext API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .function_bridge import FluentFunction, FunctionRegistry
from .functions import create_default_registry, get_shared_registry
from .message_context import MessageContext
from .plural_rules import select_category, select_plural_category
from .resolution_context import ResolutionContext
from .resolver import FluentResolver, resolve, unescape
from .resource import FluentResource
from .value_types import (
    FluentArg,
    FluentDateTime,
    FluentNone,
    FluentNumber,
    FluentString,
    FluentSymbol,
    FluentType,
)

__all__ = [
    "FluentArg",
    "FluentDateTime",
    "FluentFunction",
    "FluentNone",
    "FluentNumber",
    "FluentResolver",
    "FluentResource",
    "FluentString",
    "FluentSymbol",
    "FluentType",
    "FunctionRegistry",
    "MessageContext",
    "ResolutionContext",
    "create_default_registry",
    "get_shared_registry",
    "resolve",
    "select_category",
    "select_plural_category",
    "unescape",
]
