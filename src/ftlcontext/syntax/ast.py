"""FTL AST (Abstract Syntax Tree) node definitions.

Nodes are immutable after parsing and own their children as tuples.
Every node carries an optional trailing ``span``; the parser fills it in
when spans are enabled.
Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from typing import ClassVar, TypeIs

from ftlcontext.enums import CommentLevel

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Annotation",
    "Identifier",
    "VariantName",
    # Resource structure
    "Resource",
    "Message",
    "Term",
    "Attribute",
    "Comment",
    "GroupComment",
    "ResourceComment",
    "Junk",
    # Values
    "Pattern",
    "TextElement",
    "Placeable",
    "VariantList",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    "MessageReference",
    "TermReference",
    "AttributeExpression",
    "VariantExpression",
    "CallExpression",
    "Function",
    "NamedArgument",
    # Type aliases
    "Entry",
    "AnyComment",
    "PatternElement",
    "Expression",
    "VariantKey",
    "Value",
    "ASTNode",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Tracks character offsets in source text for error reporting and tooling.

    Attributes:
        start: Starting offset (inclusive)
        end: Ending offset (exclusive)

    Example:
        Source: "hello = world"
        Message span: Span(start=0, end=13)
        Identifier "hello" span: Span(start=0, end=5)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Annotation:
    """Parse error annotation attached to Junk.

    Attributes:
        code: Error code ("E0001" to "E0026")
        args: Positional arguments of the error message
        message: Human-readable error message
        span: Zero-width span at the failure position

    Example:
        Annotation(
            code="E0005",
            args=("foo",),
            message='Expected message "foo" to have a value or attributes',
            span=Span(start=6, end=6),
        )
    """

    code: str
    args: tuple[str, ...] = ()
    message: str = ""
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier: [a-zA-Z][a-zA-Z0-9_-]*

    Term identifiers keep their leading ``-``.
    """

    name: str
    span: Span | None = None

    @staticmethod
    def guard(key: object) -> TypeIs["Identifier"]:
        """Type guard for Identifier (used in variant keys)."""
        return isinstance(key, Identifier)


@dataclass(frozen=True, slots=True)
class VariantName:
    """Variant key name, which may contain inner spaces: [one hundred]"""

    name: str
    span: Span | None = None

    @staticmethod
    def guard(key: object) -> TypeIs["VariantName"]:
        """Type guard for VariantName (used in variant keys)."""
        return isinstance(key, VariantName)


# ============================================================================
# TOP-LEVEL ENTRIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Resource:
    """Root AST node containing all entries."""

    body: tuple["Entry", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Message:
    """Message definition.

    A message has a value, at least one attribute, or both.

    Examples:
        hello = Hello, world!
        welcome = Welcome, { $name }!
        button = Save
            .tooltip = Click to save
    """

    id: Identifier
    value: "Pattern | None" = None
    attributes: tuple["Attribute", ...] = ()
    comment: "Comment | None" = None
    span: Span | None = None

    @staticmethod
    def guard(entry: object) -> TypeIs["Message"]:
        """Type guard for Message (used in entry filtering)."""
        return isinstance(entry, Message)

    def get_attribute(self, name: str) -> "Attribute | None":
        """Return the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.id.name == name:
                return attribute
        return None


@dataclass(frozen=True, slots=True)
class Term:
    """Term definition (private, prefixed with -).

    The value is a pattern or a variant list.

    Example:
        -brand = Firefox
        -brand-name =
            {
               *[nominative] Firefox
                [locative] Firefoxie
            }
    """

    id: Identifier
    value: "Value"
    attributes: tuple["Attribute", ...] = ()
    comment: "Comment | None" = None
    span: Span | None = None

    @staticmethod
    def guard(entry: object) -> TypeIs["Term"]:
        """Type guard for Term (used in entry filtering)."""
        return isinstance(entry, Term)

    def get_attribute(self, name: str) -> "Attribute | None":
        """Return the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.id.name == name:
                return attribute
        return None


@dataclass(frozen=True, slots=True)
class Attribute:
    """Message or term attribute.

    Example:
        login = Sign In
            .tooltip = Click here to sign in  <- attribute
    """

    id: Identifier
    value: "Pattern"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Comment:
    """Standalone comment: # text

    Consecutive ``#`` lines merge into one Comment joined by newlines.
    Legacy ``//`` comments parse into this node as well.
    """

    level: ClassVar[CommentLevel] = CommentLevel.COMMENT

    content: str
    span: Span | None = None

    @staticmethod
    def guard(entry: object) -> TypeIs["Comment"]:
        """Type guard for Comment (used in entry filtering)."""
        return isinstance(entry, Comment)


@dataclass(frozen=True, slots=True)
class GroupComment:
    """Group comment: ## text

    Legacy ``[[ section ]]`` headers parse into this node.
    """

    level: ClassVar[CommentLevel] = CommentLevel.GROUP

    content: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ResourceComment:
    """Resource comment: ### text"""

    level: ClassVar[CommentLevel] = CommentLevel.RESOURCE

    content: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Junk:
    """Unparseable content (syntax error recovery).

    Junk nodes wrap the raw text of an entry that failed to parse and
    include structured error annotations for tooling support.

    Attributes:
        content: The unparseable source text
        annotations: Parse errors with positions and messages
        span: Location of junk content in source

    Example:
        Junk(
            content="foo = ",
            annotations=(
                Annotation(
                    code="E0005",
                    args=("foo",),
                    message='Expected message "foo" to have a value or attributes',
                    span=Span(start=6, end=6),
                ),
            ),
            span=Span(start=0, end=6),
        )
    """

    content: str
    annotations: tuple[Annotation, ...] = ()
    span: Span | None = None

    @staticmethod
    def guard(entry: object) -> TypeIs["Junk"]:
        """Type guard for Junk (used in entry filtering)."""
        return isinstance(entry, Junk)


# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern:
    """Text pattern with optional placeables."""

    elements: tuple["PatternElement", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class TextElement:
    """Plain text segment.

    Escape sequences (``\\{``, ``\\\\``, ``\\uXXXX``) are kept as written;
    the resolver decodes them.
    """

    value: str
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["TextElement"]:
        """Type guard for TextElement.

        Enables type-safe narrowing without circular imports.

        Example:
            if TextElement.guard(elem):
                elem.value  # Type-safe! mypy knows elem is TextElement
        """
        return isinstance(elem, TextElement)


@dataclass(frozen=True, slots=True)
class Placeable:
    """Dynamic content: { expression }"""

    expression: "Expression"
    span: Span | None = None

    @staticmethod
    def guard(elem: object) -> TypeIs["Placeable"]:
        """Type guard for Placeable."""
        return isinstance(elem, Placeable)


def _find_default(variants: tuple["Variant", ...]) -> int:
    for index, variant in enumerate(variants):
        if variant.default:
            return index
    return -1


@dataclass(frozen=True, slots=True)
class VariantList:
    """Variant list used as a term value.

    Example:
        -brand-name =
            {
               *[nominative] Firefox
                [genitive] Firefoksa
            }

    ``default_index`` is fixed when the node is built (-1 when no variant
    is marked as default).
    """

    variants: tuple["Variant", ...]
    span: Span | None = None
    default_index: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_index", _find_default(self.variants))

    @staticmethod
    def guard(value: object) -> TypeIs["VariantList"]:
        """Type guard for VariantList."""
        return isinstance(value, VariantList)


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SelectExpression:
    """Conditional expression with variants.

    Example:
        { $count ->
            [one] 1 item
           *[other] { $count } items
        }

    ``default_index`` is fixed when the node is built (-1 when no variant
    is marked as default).
    """

    selector: "Expression | None"
    variants: tuple["Variant", ...]
    span: Span | None = None
    default_index: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_index", _find_default(self.variants))

    @staticmethod
    def guard(expr: object) -> TypeIs["SelectExpression"]:
        """Type guard for SelectExpression."""
        return isinstance(expr, SelectExpression)


@dataclass(frozen=True, slots=True)
class Variant:
    """Single variant of a select expression or variant list."""

    key: "VariantKey"
    value: "Value"
    default: bool = False
    span: Span | None = None


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: "text"

    Escape sequences are kept as written:
        \\" -> "
        \\\\ -> \\
        \\{ -> {
        \\u0000 -> Unicode
    """

    value: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal: 42, -3.14 or 1.50

    The value is the source text, so trailing zeros survive to formatting.
    """

    value: str
    span: Span | None = None

    @staticmethod
    def guard(key: object) -> TypeIs["NumberLiteral"]:
        """Type guard for NumberLiteral (used in variant keys)."""
        return isinstance(key, NumberLiteral)


# ============================================================================
# REFERENCES
# ============================================================================


@dataclass(frozen=True, slots=True)
class VariableReference:
    """Variable reference: $variable"""

    id: Identifier
    span: Span | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["VariableReference"]:
        """Type guard for VariableReference."""
        return isinstance(expr, VariableReference)


@dataclass(frozen=True, slots=True)
class MessageReference:
    """Message reference: message-id"""

    id: Identifier
    span: Span | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["MessageReference"]:
        """Type guard for MessageReference."""
        return isinstance(expr, MessageReference)


@dataclass(frozen=True, slots=True)
class TermReference:
    """Term reference: -term-id"""

    id: Identifier
    span: Span | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["TermReference"]:
        """Type guard for TermReference."""
        return isinstance(expr, TermReference)


@dataclass(frozen=True, slots=True)
class AttributeExpression:
    """Attribute access: message-id.attr or -term-id.attr"""

    ref: "MessageReference | TermReference"
    name: Identifier
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class VariantExpression:
    """Variant access on a term: -term-id[key]"""

    ref: "TermReference"
    key: "VariantKey"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Function:
    """Callee of a call expression: NUMBER, DATETIME"""

    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class NamedArgument:
    """Named argument: name: value"""

    name: Identifier
    value: "StringLiteral | NumberLiteral"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class CallExpression:
    """Function call: FUNCTION(arg1, key: value)"""

    callee: Function
    positional: tuple["Expression", ...] = ()
    named: tuple[NamedArgument, ...] = ()
    span: Span | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["CallExpression"]:
        """Type guard for CallExpression."""
        return isinstance(expr, CallExpression)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type AnyComment = Comment | GroupComment | ResourceComment
type Entry = Message | Term | AnyComment | Junk
type PatternElement = TextElement | Placeable
type Value = Pattern | VariantList
type Expression = (
    StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | AttributeExpression
    | VariantExpression
    | CallExpression
    | SelectExpression
    | Placeable
)
type VariantKey = Identifier | VariantName | NumberLiteral

# Complete ASTNode type - union of all AST node types
type ASTNode = (
    Resource
    | Message
    | Term
    | Attribute
    | Comment
    | GroupComment
    | ResourceComment
    | Junk
    | Pattern
    | TextElement
    | Placeable
    | VariantList
    | SelectExpression
    | Variant
    | StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | AttributeExpression
    | VariantExpression
    | CallExpression
    | Function
    | NamedArgument
    | Identifier
    | VariantName
    | Annotation
    | Span
)
