"""Fluent syntax parsing package.

Provides the parser stream, AST definitions, parser, and serialization.
Separate from runtime to enable tooling (linters, formatters, IDE plugins).

Python 3.13+.
"""

from .ast import (
    Annotation,
    Attribute,
    AttributeExpression,
    CallExpression,
    Comment,
    Entry,
    Expression,
    Function,
    GroupComment,
    Identifier,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    ResourceComment,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantExpression,
    VariantList,
    VariantName,
)
from .cursor import EOF, ParserStream
from .parser import FluentParser
from .position import Position
from .serializer import serialize, serialize_expression

__all__ = [
    "EOF",
    "Annotation",
    "Attribute",
    "AttributeExpression",
    "CallExpression",
    "Comment",
    "Entry",
    "Expression",
    "FluentParser",
    "Function",
    "GroupComment",
    "Identifier",
    "Junk",
    "Message",
    "MessageReference",
    "NamedArgument",
    "NumberLiteral",
    "ParserStream",
    "Pattern",
    "PatternElement",
    "Placeable",
    "Position",
    "Resource",
    "ResourceComment",
    "SelectExpression",
    "Span",
    "StringLiteral",
    "Term",
    "TermReference",
    "TextElement",
    "VariableReference",
    "Variant",
    "VariantExpression",
    "VariantList",
    "VariantName",
    "parse",
    "serialize",
    "serialize_expression",
]


def parse(source: str) -> Resource:
    """Parse FTL source into AST.

    Convenience function for FluentParser.parse().

    Args:
        source: FTL source code

    Returns:
        Resource containing parsed entries

    Example:
        >>> from ftlcontext.syntax import parse
        >>> resource = parse("hello = Hello, world!")
        >>> resource.body[0].id.name
        'hello'
    """
    parser = FluentParser()
    return parser.parse(source)
