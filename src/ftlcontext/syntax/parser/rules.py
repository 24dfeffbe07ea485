"""Grammar rules for the FTL parser.

This module provides all parsing rules for FTL grammar constructs:
- Entry parsing (messages, terms, attributes, comments, legacy sections)
- Value parsing (patterns, text elements, variant lists, variants)
- Expression parsing (literals, references, calls, select expressions)

All grammar rules are co-located in a single module to:
1. Eliminate circular imports between interdependent parsing functions
2. Simplify the import graph
3. Allow direct function calls instead of function-local imports

Every production is a ``get_<production>(ps, ctx)`` function over a
``ParserStream``. A production that cannot continue raises ``ParseError``;
only ``get_entry_or_junk`` catches it, turning the failed entry into Junk.

Lookahead Patterns:
    - `{` starts a Placeable
    - `$` starts a VariableReference
    - `-` followed by a digit starts a NumberLiteral, otherwise a TermReference
    - `->` after a selector starts a SelectExpression
    - `*[` marks the default variant
    Line-level lookahead lives in ``lookahead.py``.
"""

import re
from dataclasses import dataclass, replace

from ftlcontext.constants import FUNCTION_NAME_PATTERN, MAX_DEPTH
from ftlcontext.diagnostics import ParseError
from ftlcontext.enums import CommentLevel
from ftlcontext.syntax.ast import (
    AnyComment,
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
    ResourceComment,
    SelectExpression,
    Span,
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
from ftlcontext.syntax.cursor import EOF, Char, ParserStream

from .lookahead import (
    is_peek_next_line_attribute_start,
    is_peek_next_line_comment,
    is_peek_next_line_legacy_comment,
    is_peek_next_line_value,
    is_peek_next_line_variant_start,
    is_peek_value_start,
    skip_to_next_entry_start,
)
from .primitives import (
    expect_char,
    is_digit,
    is_identifier_start,
    is_number_start,
    take_char,
    take_digit,
    take_hex_digit,
    take_id_char,
    take_id_start,
    take_variant_name_char,
    trim_right,
)
from .whitespace import (
    expect_indent,
    expect_newline,
    is_peek_newline,
    peek_inline_ws,
    skip_indent,
    skip_inline_ws,
    skip_newline,
)

__all__ = [
    "ParseContext",
    "get_comment",
    "get_entry",
    "get_entry_or_junk",
    "get_expression",
    "get_identifier",
    "get_message",
    "get_pattern",
    "get_term",
]

_FUNCTION_NAME = re.compile(FUNCTION_NAME_PATTERN)

# Characters that may follow a backslash in text and in string literals.
_TEXT_ESCAPES = frozenset("{\\")
_STRING_ESCAPES = frozenset('{\\"')

_UNICODE_ESCAPE_LEN: int = 4


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        with_spans: Attach source spans to nodes
        max_nesting_depth: Maximum allowed nesting depth for placeables,
            call arguments and variant lists
        current_depth: Current nesting depth (0 = top level)
    """

    with_spans: bool = True
    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth >= self.max_nesting_depth

    def enter_nesting(self) -> "ParseContext":
        """Create new context with incremented depth for a nested expression.

        Raises:
            ParseError: E0027 when the nesting limit is reached
        """
        if self.is_depth_exceeded():
            raise ParseError("E0027", str(self.max_nesting_depth))
        return replace(self, current_depth=self.current_depth + 1)


def _spanned[N](ps: ParserStream, ctx: ParseContext, start: int, node: N) -> N:
    """Attach Span(start, current index) unless the node already has one."""
    if not ctx.with_spans or getattr(node, "span", None) is not None:
        return node
    return replace(node, span=Span(start, ps.index))  # type: ignore[type-var]


def _is_line_char(ch: Char) -> bool:
    return ch not in ("\r", "\n")


# =============================================================================
# Entries
# =============================================================================


def get_entry_or_junk(ps: ParserStream, ctx: ParseContext) -> Entry:
    """Parse one entry, recovering into Junk on a syntax error.

    The Junk node holds the raw text from the entry start to the next entry
    start and one Annotation positioned where parsing failed.
    """
    entry_start = ps.index
    ps.begin_capture()

    try:
        entry = get_entry(ps, ctx)
        expect_newline(ps)
        return entry
    except ParseError as error:
        error_pos = ps.index
        skip_to_next_entry_start(ps)
        next_entry_start = ps.index

        annotation = Annotation(
            code=error.code,
            args=error.arguments,
            message=error.message,
            span=Span(error_pos, error_pos) if ctx.with_spans else None,
        )
        junk = Junk(ps.captured_text(), (annotation,))
        if ctx.with_spans:
            junk = replace(junk, span=Span(entry_start, next_entry_start))
        return junk
    finally:
        ps.end_capture()


def get_entry(ps: ParserStream, ctx: ParseContext) -> Entry:
    """Dispatch on the first character of an entry.

    Raises:
        ParseError: E0002 when nothing can start an entry here
    """
    match ps.current:
        case "#":
            return get_comment(ps, ctx)
        case "/":
            return get_legacy_comment(ps, ctx)
        case "[":
            return get_section(ps, ctx)
        case "-":
            return get_term(ps, ctx)

    if is_identifier_start(ps):
        return get_message(ps, ctx)

    raise ParseError("E0002")


def get_comment(ps: ParserStream, ctx: ParseContext) -> AnyComment:
    """Parse ``#``, ``##`` or ``###`` comment lines.

    Consecutive lines of the same level merge into one node, joined by
    newlines. An empty comment line contributes an empty line.
    """
    start = ps.index
    level: CommentLevel | None = None
    content: list[str] = []

    while True:
        max_hashes = 3 if level is None else level + 1
        hashes = 0
        while ps.current_is("#") and hashes < max_hashes:
            ps.next()
            hashes += 1

        if level is None:
            level = CommentLevel(hashes - 1)

        if not is_peek_newline(ps) and ps.current is not EOF:
            expect_char(ps, " ")
            while (ch := take_char(ps, _is_line_char)) is not EOF:
                content.append(ch)

        if is_peek_next_line_comment(ps, level):
            content.append("\n")
            skip_newline(ps)
        else:
            break

    text = "".join(content)
    node: AnyComment
    match level:
        case CommentLevel.COMMENT:
            node = Comment(text)
        case CommentLevel.GROUP:
            node = GroupComment(text)
        case _:
            node = ResourceComment(text)
    return _spanned(ps, ctx, start, node)


def get_legacy_comment(ps: ParserStream, ctx: ParseContext) -> Comment:
    """Parse legacy ``//`` comment lines into a Comment."""
    start = ps.index
    content: list[str] = []

    while True:
        expect_char(ps, "/")
        expect_char(ps, "/")
        if ps.current_is(" "):
            ps.next()
        while (ch := take_char(ps, _is_line_char)) is not EOF:
            content.append(ch)

        if is_peek_next_line_legacy_comment(ps):
            content.append("\n")
            skip_newline(ps)
        else:
            break

    return _spanned(ps, ctx, start, Comment("".join(content)))


def get_section(ps: ParserStream, ctx: ParseContext) -> GroupComment:
    """Parse a legacy ``[[ section ]]`` header into a GroupComment."""
    start = ps.index
    expect_char(ps, "[")
    expect_char(ps, "[")
    skip_inline_ws(ps)

    name = get_variant_name(ps, ctx)

    skip_inline_ws(ps)
    expect_char(ps, "]")
    expect_char(ps, "]")
    return _spanned(ps, ctx, start, GroupComment(name.name))


def get_message(ps: ParserStream, ctx: ParseContext) -> Message:
    """Parse ``id = pattern`` with optional attributes.

    Raises:
        ParseError: E0005 when the message has neither a value nor attributes
    """
    start = ps.index
    msg_id = get_identifier(ps, ctx)

    skip_inline_ws(ps)
    expect_char(ps, "=")

    pattern: Pattern | None = None
    if is_peek_value_start(ps):
        skip_indent(ps)
        pattern = get_pattern(ps, ctx)
    else:
        skip_inline_ws(ps)

    attributes: tuple[Attribute, ...] = ()
    if is_peek_next_line_attribute_start(ps):
        attributes = get_attributes(ps, ctx)

    if pattern is None and not attributes:
        raise ParseError("E0005", msg_id.name)

    return _spanned(ps, ctx, start, Message(msg_id, pattern, attributes))


def get_term(ps: ParserStream, ctx: ParseContext) -> Term:
    """Parse ``-id = value`` with optional attributes.

    Raises:
        ParseError: E0006 when the term has no value
    """
    start = ps.index
    term_id = get_term_identifier(ps, ctx)

    skip_inline_ws(ps)
    expect_char(ps, "=")

    if not is_peek_value_start(ps):
        raise ParseError("E0006", term_id.name)

    skip_indent(ps)
    value = get_value(ps, ctx)

    attributes: tuple[Attribute, ...] = ()
    if is_peek_next_line_attribute_start(ps):
        attributes = get_attributes(ps, ctx)

    return _spanned(ps, ctx, start, Term(term_id, value, attributes))


def get_attribute(ps: ParserStream, ctx: ParseContext) -> Attribute:
    start = ps.index
    expect_char(ps, ".")

    key = get_identifier(ps, ctx)

    skip_inline_ws(ps)
    expect_char(ps, "=")

    if not is_peek_value_start(ps):
        raise ParseError("E0012")

    skip_indent(ps)
    value = get_pattern(ps, ctx)
    return _spanned(ps, ctx, start, Attribute(key, value))


def get_attributes(ps: ParserStream, ctx: ParseContext) -> tuple[Attribute, ...]:
    attributes: list[Attribute] = []
    while True:
        expect_indent(ps)
        attributes.append(get_attribute(ps, ctx))
        if not is_peek_next_line_attribute_start(ps):
            break
    return tuple(attributes)


# =============================================================================
# Identifiers and keys
# =============================================================================


def get_identifier(ps: ParserStream, ctx: ParseContext) -> Identifier:
    """Parse ``[a-zA-Z][a-zA-Z0-9_-]*``."""
    start = ps.index
    name = [take_id_start(ps)]
    while (ch := take_id_char(ps)) is not EOF:
        name.append(ch)
    return _spanned(ps, ctx, start, Identifier("".join(name)))


def get_term_identifier(ps: ParserStream, ctx: ParseContext) -> Identifier:
    """Parse ``-identifier``, keeping the ``-`` in the name."""
    start = ps.index
    expect_char(ps, "-")
    ident = get_identifier(ps, ctx)
    return _spanned(ps, ctx, start, Identifier(f"-{ident.name}"))


def get_variant_name(ps: ParserStream, ctx: ParseContext) -> VariantName:
    start = ps.index
    name = [take_id_start(ps)]
    while (ch := take_variant_name_char(ps)) is not EOF:
        name.append(ch)
    return _spanned(ps, ctx, start, VariantName(trim_right("".join(name))))


def get_variant_key(ps: ParserStream, ctx: ParseContext) -> VariantKey:
    """Parse a number or a variant name.

    Raises:
        ParseError: E0013 at EOF
    """
    ch = ps.current
    if ch is EOF:
        raise ParseError("E0013")
    if is_digit(ch) or ch == "-":
        return get_number(ps, ctx)
    return get_variant_name(ps, ctx)


def _get_digits(ps: ParserStream) -> str:
    digits: list[str] = []
    while (ch := take_digit(ps)) is not EOF:
        digits.append(ch)
    if not digits:
        raise ParseError("E0004", "0-9")
    return "".join(digits)


def get_number(ps: ParserStream, ctx: ParseContext) -> NumberLiteral:
    """Parse ``-?[0-9]+(\\.[0-9]+)?`` keeping the source text."""
    start = ps.index
    parts: list[str] = []

    if ps.current_is("-"):
        parts.append("-")
        ps.next()

    parts.append(_get_digits(ps))

    if ps.current_is("."):
        parts.append(".")
        ps.next()
        parts.append(_get_digits(ps))

    return _spanned(ps, ctx, start, NumberLiteral("".join(parts)))


# =============================================================================
# Values
# =============================================================================


def get_value(ps: ParserStream, ctx: ParseContext) -> Value:
    """Parse a pattern, or a variant list when ``{`` is followed by variants."""
    start = ps.index
    value: Value
    if ps.current_is("{"):
        ps.peek()
        peek_inline_ws(ps)
        if is_peek_next_line_variant_start(ps):
            value = get_variant_list(ps, ctx)
            return _spanned(ps, ctx, start, value)
    value = get_pattern(ps, ctx)
    return _spanned(ps, ctx, start, value)


def get_variant_list(ps: ParserStream, ctx: ParseContext) -> VariantList:
    start = ps.index
    expect_char(ps, "{")
    skip_inline_ws(ps)
    variants = get_variants(ps, ctx.enter_nesting())
    expect_indent(ps)
    expect_char(ps, "}")
    return _spanned(ps, ctx, start, VariantList(variants))


def get_variant(ps: ParserStream, ctx: ParseContext, *, has_default: bool) -> Variant:
    """Parse ``*[key] value`` or ``[key] value``.

    Raises:
        ParseError: E0015 for a second default, E0012 for a missing value
    """
    start = ps.index
    is_default = False

    if ps.current_is("*"):
        if has_default:
            raise ParseError("E0015")
        ps.next()
        is_default = True

    expect_char(ps, "[")
    key = get_variant_key(ps, ctx)
    expect_char(ps, "]")

    if not is_peek_value_start(ps):
        raise ParseError("E0012")

    skip_indent(ps)
    value = get_value(ps, ctx)
    return _spanned(ps, ctx, start, Variant(key, value, is_default))


def get_variants(ps: ParserStream, ctx: ParseContext) -> tuple[Variant, ...]:
    """Parse indented variant lines.

    Raises:
        ParseError: E0010 when no variant is marked as default
    """
    variants: list[Variant] = []
    has_default = False

    while True:
        expect_indent(ps)
        variant = get_variant(ps, ctx, has_default=has_default)
        has_default = has_default or variant.default
        variants.append(variant)

        if not is_peek_next_line_variant_start(ps):
            break

    if not has_default:
        raise ParseError("E0010")

    return tuple(variants)


def get_pattern(ps: ParserStream, ctx: ParseContext) -> Pattern:
    """Parse text and placeables up to a line that does not continue the pattern.

    The last text element is trimmed on the right.
    """
    start = ps.index
    elements: list[PatternElement] = []
    skip_inline_ws(ps)

    while (ch := ps.current) is not EOF:
        if is_peek_newline(ps) and not is_peek_next_line_value(ps):
            break

        if ch == "{":
            elements.append(get_placeable(ps, ctx))
        else:
            elements.append(get_text_element(ps, ctx))

    if elements and isinstance(last := elements[-1], TextElement):
        elements[-1] = replace(last, value=trim_right(last.value))

    return _spanned(ps, ctx, start, Pattern(tuple(elements)))


def get_text_element(ps: ParserStream, ctx: ParseContext) -> TextElement:
    """Parse a run of text, joining continuation lines with a newline."""
    start = ps.index
    buffer: list[str] = []

    while (ch := ps.current) is not EOF:
        if ch == "{":
            break

        if ch in ("\r", "\n"):
            if not is_peek_next_line_value(ps):
                break
            skip_newline(ps)
            skip_inline_ws(ps)
            buffer.append("\n")
            continue

        if ch == "\\":
            ps.next()
            buffer.append(get_escape_sequence(ps, _TEXT_ESCAPES))
            continue

        buffer.append(ch)
        ps.next()

    return _spanned(ps, ctx, start, TextElement("".join(buffer)))


def get_escape_sequence(ps: ParserStream, specials: frozenset[str]) -> str:
    """Parse the part of an escape after the backslash, returning it as written.

    Raises:
        ParseError: E0026 for a malformed ``\\u`` sequence, E0025 otherwise
    """
    ch = ps.current
    if ch is not EOF and ch in specials:
        ps.next()
        return f"\\{ch}"

    if ch == "u":
        ps.next()
        sequence: list[str] = []
        for _ in range(_UNICODE_ESCAPE_LEN):
            hex_digit = take_hex_digit(ps)
            if hex_digit is EOF:
                seen = "".join(sequence)
                if ps.current is not EOF:
                    seen += ps.current
                raise ParseError("E0026", seen)
            sequence.append(hex_digit)
        return "\\u" + "".join(sequence)

    raise ParseError("E0025", "" if ch is EOF else ch)


# =============================================================================
# Expressions
# =============================================================================


def get_placeable(ps: ParserStream, ctx: ParseContext) -> Placeable:
    """Parse ``{ expression }``.

    Raises:
        ParseError: E0027 when placeables nest deeper than the context allows
    """
    start = ps.index
    expect_char(ps, "{")
    expression = get_expression(ps, ctx.enter_nesting())
    expect_char(ps, "}")
    return _spanned(ps, ctx, start, Placeable(expression))


def get_expression(ps: ParserStream, ctx: ParseContext) -> Expression:
    """Parse an inline expression, or a select expression after ``->``.

    Raises:
        ParseError: E0016/E0017/E0018 for an illegal selector, E0023 for a
            nested variant list, E0019 for a term attribute used as a placeable
    """
    start = ps.index
    skip_inline_ws(ps)

    selector = get_selector_expression(ps, ctx)

    skip_inline_ws(ps)

    if ps.current_is("-"):
        ps.peek()
        if ps.current_peek_is(">"):
            return _spanned(ps, ctx, start, _get_select_expression(ps, ctx, selector))
        ps.reset_peek()

    if isinstance(selector, AttributeExpression) and isinstance(selector.ref, TermReference):
        raise ParseError("E0019")

    return _spanned(ps, ctx, start, selector)


def _get_select_expression(
    ps: ParserStream, ctx: ParseContext, selector: Expression
) -> SelectExpression:
    match selector:
        case MessageReference():
            raise ParseError("E0016")
        case AttributeExpression(ref=MessageReference()):
            raise ParseError("E0018")
        case VariantExpression():
            raise ParseError("E0017")

    ps.next()
    ps.next()
    skip_inline_ws(ps)

    variants = get_variants(ps, ctx)

    if any(isinstance(variant.value, VariantList) for variant in variants):
        raise ParseError("E0023")

    expect_indent(ps)
    return SelectExpression(selector, variants)


def get_selector_expression(ps: ParserStream, ctx: ParseContext) -> Expression:
    """Parse a literal with an optional ``.attr``, ``[key]`` or ``(args)`` suffix.

    Raises:
        ParseError: E0024 for ``[key]`` on a message, E0008 for a bad callee,
            E0027 for call arguments nested too deep
    """
    start = ps.index
    if ps.current_is("{"):
        return get_placeable(ps, ctx)

    literal = get_literal(ps, ctx)

    if not isinstance(literal, MessageReference | TermReference):
        return literal

    expression: Expression
    match ps.current:
        case ".":
            ps.next()
            attr = get_identifier(ps, ctx)
            expression = AttributeExpression(literal, attr)

        case "[":
            ps.next()
            if isinstance(literal, MessageReference):
                raise ParseError("E0024")
            key = get_variant_key(ps, ctx)
            expect_char(ps, "]")
            expression = VariantExpression(literal, key)

        case "(":
            ps.next()
            if not _FUNCTION_NAME.match(literal.id.name):
                raise ParseError("E0008")
            positional, named = get_call_args(ps, ctx.enter_nesting())
            expect_char(ps, ")")
            callee = Function(literal.id.name, literal.span)
            expression = CallExpression(callee, positional, named)

        case _:
            return literal

    return _spanned(ps, ctx, start, expression)


def get_call_arg(ps: ParserStream, ctx: ParseContext) -> Expression | NamedArgument:
    """Parse a positional argument or ``name: value``.

    Raises:
        ParseError: E0009 when the name is not a plain identifier
    """
    start = ps.index
    expression = get_selector_expression(ps, ctx)

    skip_inline_ws(ps)

    if not ps.current_is(":"):
        return expression

    if not isinstance(expression, MessageReference):
        raise ParseError("E0009")

    ps.next()
    skip_inline_ws(ps)

    value = get_arg_value(ps, ctx)
    return _spanned(ps, ctx, start, NamedArgument(expression.id, value))


def get_call_args(
    ps: ParserStream, ctx: ParseContext
) -> tuple[tuple[Expression, ...], tuple[NamedArgument, ...]]:
    """Parse a comma-separated argument list, which may span lines.

    Raises:
        ParseError: E0022 for a repeated name, E0021 for a positional
            argument after a named one
    """
    positional: list[Expression] = []
    named: list[NamedArgument] = []
    names: set[str] = set()

    skip_inline_ws(ps)
    skip_indent(ps)

    while not ps.current_is(")"):
        arg = get_call_arg(ps, ctx)
        if isinstance(arg, NamedArgument):
            if arg.name.name in names:
                raise ParseError("E0022")
            named.append(arg)
            names.add(arg.name.name)
        elif names:
            raise ParseError("E0021")
        else:
            positional.append(arg)

        skip_inline_ws(ps)
        skip_indent(ps)

        if not ps.current_is(","):
            break

        ps.next()
        skip_inline_ws(ps)
        skip_indent(ps)

    return tuple(positional), tuple(named)


def get_arg_value(ps: ParserStream, ctx: ParseContext) -> StringLiteral | NumberLiteral:
    """Parse the value of a named argument.

    Raises:
        ParseError: E0012 unless it is a number or a string
    """
    if is_number_start(ps):
        return get_number(ps, ctx)
    if ps.current_is('"'):
        return get_string(ps, ctx)
    raise ParseError("E0012")


def get_string(ps: ParserStream, ctx: ParseContext) -> StringLiteral:
    """Parse a double-quoted string, keeping escapes as written.

    Raises:
        ParseError: E0020 when the line or the input ends before the closing quote
    """
    start = ps.index
    buffer: list[str] = []

    expect_char(ps, '"')

    while (ch := take_char(ps, _is_string_char)) is not EOF:
        if ch == "\\":
            buffer.append(get_escape_sequence(ps, _STRING_ESCAPES))
        else:
            buffer.append(ch)

    if not ps.current_is('"'):
        raise ParseError("E0020")

    ps.next()
    return _spanned(ps, ctx, start, StringLiteral("".join(buffer)))


def _is_string_char(ch: Char) -> bool:
    return ch not in ('"', "\r", "\n")


def get_literal(ps: ParserStream, ctx: ParseContext) -> Expression:
    """Parse a variable, message or term reference, a number, or a string.

    Raises:
        ParseError: E0014 when no literal starts here
    """
    start = ps.index
    ch = ps.current
    literal: Expression

    if ch is EOF:
        raise ParseError("E0014")

    if ch == "$":
        ps.next()
        literal = VariableReference(get_identifier(ps, ctx))
    elif is_identifier_start(ps):
        literal = MessageReference(get_identifier(ps, ctx))
    elif is_number_start(ps):
        return get_number(ps, ctx)
    elif ch == "-":
        literal = TermReference(get_term_identifier(ps, ctx))
    elif ch == '"':
        return get_string(ps, ctx)
    else:
        raise ParseError("E0014")

    return _spanned(ps, ctx, start, literal)
