"""Serialize Fluent AST back to FTL syntax.

Converts AST nodes to FTL source code. Useful for:
- Formatters
- Code generators
- Property-based testing (roundtrip: parse -> serialize -> parse)

Escape sequences are stored raw in the AST, so text and string literals
are written back exactly as they were parsed.

Python 3.13+.
"""

from ftlcontext.syntax.ast import (
    AnyComment,
    Attribute,
    AttributeExpression,
    CallExpression,
    Comment,
    Entry,
    Expression,
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
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    Value,
    VariableReference,
    Variant,
    VariantExpression,
    VariantKey,
    VariantList,
    VariantName,
)

__all__ = ["FluentSerializer", "serialize", "serialize_expression"]

_INDENT: str = "    "

# Default variants are written one column to the left so the `[` of every
# variant lines up: "   *[key]" and "    [key]".
_DEFAULT_VARIANT_PREFIX: str = "   *"
_VARIANT_PREFIX: str = "    "


class _IndentingWriter:
    """Collects output, indenting every non-empty line by the current level."""

    __slots__ = ("_indents", "_last_was_newline", "_parts")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._indents = 0
        self._last_was_newline = True

    def indent(self) -> None:
        self._indents += 1

    def dedent(self) -> None:
        self._indents -= 1

    def write(self, text: str) -> None:
        for i, piece in enumerate(text.split("\n")):
            if i > 0:
                self._parts.append("\n")
                self._last_was_newline = True
            if not piece:
                continue
            if self._last_was_newline and self._indents > 0:
                self._parts.append(_INDENT * self._indents)
            self._parts.append(piece)
            self._last_was_newline = False

    def getvalue(self) -> str:
        return "".join(self._parts)


def _includes_newline(element: PatternElement) -> bool:
    return isinstance(element, TextElement) and "\n" in element.value


def _is_select_expression(element: PatternElement) -> bool:
    return isinstance(element, Placeable) and isinstance(element.expression, SelectExpression)


class FluentSerializer:
    """Converts AST back to FTL source string.

    Stateless apart from its options; every call builds its output in a
    fresh writer, so one instance can be reused.

    Usage:
        >>> from ftlcontext.syntax import parse
        >>> ast = parse("hello = Hello, world!")
        >>> FluentSerializer().serialize(ast)
        'hello = Hello, world!\\n'
    """

    __slots__ = ("_with_junk",)

    def __init__(self, *, with_junk: bool = False) -> None:
        """Initialize serializer.

        Args:
            with_junk: Emit Junk content verbatim instead of dropping it
        """
        self._with_junk = with_junk

    def serialize(self, resource: Resource) -> str:
        """Serialize Resource to FTL string.

        Comments other than those attached to a message or term are
        followed by a blank line, and preceded by one unless they open
        the output.
        """
        writer = _IndentingWriter()
        has_entries = False

        for entry in resource.body:
            if isinstance(entry, Junk) and not self._with_junk:
                continue
            self._write_entry(writer, entry, has_entries=has_entries)
            has_entries = True

        return writer.getvalue()

    def serialize_expression(self, expression: Expression) -> str:
        writer = _IndentingWriter()
        self._write_expression(writer, expression)
        return writer.getvalue()

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _write_entry(self, writer: _IndentingWriter, entry: Entry, *, has_entries: bool) -> None:
        match entry:
            case Message() | Term():
                self._write_message_or_term(writer, entry)
            case Comment() | GroupComment() | ResourceComment():
                if has_entries:
                    writer.write("\n")
                self._write_comment(writer, entry)
                writer.write("\n\n")
            case Junk():
                writer.write(entry.content)

    def _write_comment(self, writer: _IndentingWriter, comment: AnyComment) -> None:
        prefix = comment.level.sigil
        lines = comment.content.split("\n")
        writer.write("\n".join(f"{prefix} {line}" if line else prefix for line in lines))

    def _write_message_or_term(self, writer: _IndentingWriter, entry: Message | Term) -> None:
        if entry.comment is not None:
            self._write_comment(writer, entry.comment)
            writer.write("\n")

        writer.write(f"{entry.id.name} =")

        if entry.value is not None:
            self._write_value(writer, entry.value)

        for attribute in entry.attributes:
            self._write_attribute(writer, attribute)

        writer.write("\n")

    def _write_attribute(self, writer: _IndentingWriter, attribute: Attribute) -> None:
        writer.indent()
        writer.write(f"\n.{attribute.id.name} =")
        self._write_value(writer, attribute.value)
        writer.dedent()

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _write_value(self, writer: _IndentingWriter, value: Value) -> None:
        match value:
            case Pattern():
                self._write_pattern(writer, value)
            case VariantList():
                self._write_variant_list(writer, value)

    def _write_pattern(self, writer: _IndentingWriter, pattern: Pattern) -> None:
        """Write a pattern after ``=`` or a variant key.

        Multiline patterns and patterns holding a select expression start
        on an indented new line; everything else stays inline.
        """
        writer.indent()
        elements = pattern.elements
        if any(_includes_newline(e) or _is_select_expression(e) for e in elements):
            writer.write("\n")
        else:
            writer.write(" ")

        for element in elements:
            match element:
                case TextElement():
                    writer.write(element.value)
                case Placeable():
                    self._write_placeable(writer, element)

        writer.dedent()

    def _write_variant_list(self, writer: _IndentingWriter, variant_list: VariantList) -> None:
        writer.indent()
        writer.write("\n{")
        for variant in variant_list.variants:
            self._write_variant(writer, variant)
        writer.write("\n}")
        writer.dedent()

    def _write_variant(self, writer: _IndentingWriter, variant: Variant) -> None:
        writer.write("\n")
        writer.write(_DEFAULT_VARIANT_PREFIX if variant.default else _VARIANT_PREFIX)
        writer.write(f"[{_variant_key_text(variant.key)}]")
        writer.indent()
        self._write_value(writer, variant.value)
        writer.dedent()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _write_placeable(self, writer: _IndentingWriter, placeable: Placeable) -> None:
        match placeable.expression:
            case Placeable() as inner:
                writer.write("{")
                self._write_placeable(writer, inner)
                writer.write("}")
            case SelectExpression() as select:
                writer.write("{" if select.selector is None else "{ ")
                self._write_select_expression(writer, select)
                writer.write("}")
            case expression:
                writer.write("{ ")
                self._write_expression(writer, expression)
                writer.write(" }")

    def _write_expression(self, writer: _IndentingWriter, expression: Expression) -> None:
        match expression:
            case StringLiteral():
                writer.write(f'"{expression.value}"')
            case NumberLiteral():
                writer.write(expression.value)
            case VariableReference():
                writer.write(f"${expression.id.name}")
            case MessageReference() | TermReference():
                writer.write(expression.id.name)
            case AttributeExpression():
                self._write_expression(writer, expression.ref)
                writer.write(f".{expression.name.name}")
            case VariantExpression():
                self._write_expression(writer, expression.ref)
                writer.write(f"[{_variant_key_text(expression.key)}]")
            case CallExpression():
                self._write_call_expression(writer, expression)
            case SelectExpression():
                self._write_select_expression(writer, expression)
            case Placeable():
                self._write_placeable(writer, expression)

    def _write_select_expression(
        self, writer: _IndentingWriter, expression: SelectExpression
    ) -> None:
        if expression.selector is not None:
            self._write_expression(writer, expression.selector)
            writer.write(" ->")

        for variant in expression.variants:
            self._write_variant(writer, variant)

        writer.write("\n")

    def _write_call_expression(self, writer: _IndentingWriter, expression: CallExpression) -> None:
        args: list[str] = [self.serialize_expression(arg) for arg in expression.positional]
        args.extend(_named_argument_text(arg) for arg in expression.named)
        writer.write(f"{expression.callee.name}({', '.join(args)})")


def _named_argument_text(arg: NamedArgument) -> str:
    match arg.value:
        case StringLiteral(value=value):
            return f'{arg.name.name}: "{value}"'
        case NumberLiteral(value=value):
            return f"{arg.name.name}: {value}"


def _variant_key_text(key: VariantKey) -> str:
    match key:
        case Identifier(name=name) | VariantName(name=name):
            return name
        case NumberLiteral(value=value):
            return value


def serialize(resource: Resource, *, with_junk: bool = False) -> str:
    """Serialize Resource to FTL string.

    Convenience function for FluentSerializer.serialize().

    Args:
        resource: Resource AST node
        with_junk: Emit Junk content verbatim (default: Junk is dropped)

    Returns:
        FTL source code

    Example:
        >>> from ftlcontext.syntax import parse, serialize
        >>> ast = parse("hello = Hello, world!")
        >>> ftl = serialize(ast)
        >>> assert ftl == "hello = Hello, world!\\n"
    """
    return FluentSerializer(with_junk=with_junk).serialize(resource)


def serialize_expression(expression: Expression) -> str:
    """Serialize a single expression, e.g. ``FOO(bar, baz: "baz")``."""
    return FluentSerializer().serialize_expression(expression)
