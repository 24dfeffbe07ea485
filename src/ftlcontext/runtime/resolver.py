"""Fluent message resolver.

Walks the syntax tree of a message and produces its final string. All
failures are reported to the caller's error list and replaced by a
fallback value; resolution itself never raises.

Resolution rules:
    - Text is unescaped and passed through the context's transform
    - References look up messages and terms in the context
    - Select expressions pick the first variant whose key matches the
      selector, in declaration order, falling back to the default variant
    - A pattern reached again while it is being resolved is a cycle and
      renders as "???"
    - Placeables are wrapped in Unicode bidi isolation marks (FSI/PDI) when
      the pattern has more than one element, and cut at 2500 characters
    - Reference chains and nested placeables deeper than MAX_DEPTH stop with
      a FluentRangeError instead of exhausting the Python stack

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

from ftlcontext.constants import MAX_PLACEABLE_LENGTH, UNICODE_FSI, UNICODE_PDI
from ftlcontext.diagnostics import (
    ErrorTemplate,
    FluentCyclicReferenceError,
    FluentError,
    FluentRangeError,
    FluentReferenceError,
    FluentTypeError,
)
from ftlcontext.syntax.ast import (
    Attribute,
    AttributeExpression,
    CallExpression,
    Identifier,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
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

from .resolution_context import ResolutionContext
from .value_types import (
    FluentArg,
    FluentDateTime,
    FluentNone,
    FluentNumber,
    FluentString,
    FluentSymbol,
    FluentType,
)

if TYPE_CHECKING:
    from ftlcontext.syntax.ast import ASTNode, Value, VariantKey

    from .function_bridge import FluentFunction

__all__ = ["FluentResolver", "ResolverHost", "resolve", "unescape"]

logger = logging.getLogger(__name__)

# \uXXXX, or a backslash before any single character (\{ \\ \").
_ESCAPE = re.compile(r"\\(?:u([0-9a-fA-F]{4})|(.))", re.DOTALL)


class ResolverHost(Protocol):
    """What the resolver needs from the context that owns the messages."""

    @property
    def locales(self) -> Sequence[str]: ...

    @property
    def locale(self) -> str: ...

    @property
    def use_isolating(self) -> bool: ...

    @property
    def transform(self) -> Callable[[str], str]: ...

    def get_message(self, message_id: str) -> Message | None: ...

    def get_term(self, term_id: str) -> Term | None: ...

    def get_function(self, name: str) -> FluentFunction | None: ...


def unescape(text: str) -> str:
    """Decode the escape sequences kept raw in text and string literals.

    Example:
        >>> unescape(r"\\{ literal \\u0041")
        '{ literal A'
    """
    if "\\" not in text:
        return text
    return _ESCAPE.sub(_decode_escape, text)


def _decode_escape(match: re.Match[str]) -> str:
    hex_digits, char = match.groups()
    if hex_digits is not None:
        return chr(int(hex_digits, 16))
    return char


class FluentResolver:
    """Resolves messages, attributes and patterns of one context to strings.

    Holds only the context; per-call state lives in a fresh
    ResolutionContext, so one resolver can serve concurrent calls.
    """

    __slots__ = ("_host",)

    def __init__(self, host: ResolverHost) -> None:
        """Initialize resolver.

        Args:
            host: Context providing messages, terms, functions and options
        """
        self._host = host

    def resolve(
        self,
        node: Message | Attribute | Pattern,
        args: Mapping[str, FluentArg] | None = None,
        errors: list[FluentError] | None = None,
    ) -> str:
        """Resolve a message, an attribute or a pattern to its final string.

        Args:
            node: What to resolve
            args: Variables referenced as ``$name``
            errors: List that resolution errors are appended to

        Returns:
            Best-effort output; failed parts render as their fallbacks
        """
        ctx = ResolutionContext(
            args=args if args is not None else {},
            errors=errors if errors is not None else [],
        )
        return self._resolve(node, ctx).format(self._host)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _resolve(self, node: ASTNode, ctx: ResolutionContext) -> FluentType:  # noqa: PLR0911
        """Resolve any node that can produce a value.

        Note: PLR0911 (too many returns) is acceptable here - each case
        represents a distinct node kind in the Fluent AST.
        """
        match node:
            case TextElement(value=value):
                return FluentString(self._host.transform(unescape(value)))
            case StringLiteral(value=value):
                return FluentString(unescape(value))
            case NumberLiteral(value=value):
                return FluentNumber(value)
            case Identifier(name=name) | VariantName(name=name):
                return FluentSymbol(name)
            case Message():
                return self._resolve_message(node, ctx)
            case Term():
                return self._resolve_value(node.value, ctx)
            case Attribute():
                return self._resolve_pattern(node.value, ctx)
            case Placeable():
                return self._resolve_placeable(node, ctx)
            case Pattern():
                return self._resolve_pattern(node, ctx)
            case VariantList():
                default = self._default_variant(node.variants, node.default_index, ctx)
                return self._resolve_value(default, ctx)
            case VariableReference():
                return self._resolve_variable(node, ctx)
            case MessageReference() | TermReference():
                target = self._lookup(node, ctx)
                return target if isinstance(target, FluentNone) else self._resolve(target, ctx)
            case AttributeExpression():
                return self._resolve_attribute_expression(node, ctx)
            case VariantExpression():
                return self._resolve_variant_expression(node, ctx)
            case SelectExpression():
                return self._resolve_select_expression(node, ctx)
            case CallExpression():
                return self._resolve_call(node, ctx)
            case _:
                ctx.report(FluentRangeError(ErrorTemplate.message_no_value(type(node).__name__)))
                return FluentNone()

    def _resolve_value(self, value: Value | None, ctx: ResolutionContext) -> FluentType:
        if value is None:
            return FluentNone()
        return self._resolve(value, ctx)

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def _resolve_pattern(self, pattern: Pattern, ctx: ResolutionContext) -> FluentType:
        """Concatenate the elements of a pattern.

        A pattern already on the dirty set is a cycle: it reports
        FluentCyclicReferenceError and renders as "???" without recursing.
        Past the depth limit it reports FluentRangeError the same way.
        """
        if ctx.contains(pattern):
            ctx.report(FluentCyclicReferenceError(ErrorTemplate.cyclic_reference()))
            return FluentNone()

        if ctx.is_depth_exceeded():
            return self._depth_exceeded(ctx)

        ctx.push(pattern)
        try:
            # A lone placeable renders without isolation marks
            use_isolating = self._host.use_isolating and len(pattern.elements) > 1
            parts: list[str] = []

            for element in pattern.elements:
                if isinstance(element, TextElement):
                    parts.append(self._host.transform(unescape(element.value)))
                    continue

                part = self._resolve(element, ctx).format(self._host)

                if len(part) > MAX_PLACEABLE_LENGTH:
                    ctx.report(
                        FluentRangeError(
                            ErrorTemplate.placeable_too_long(len(part), MAX_PLACEABLE_LENGTH)
                        )
                    )
                    part = part[:MAX_PLACEABLE_LENGTH]

                if use_isolating:
                    parts.append(f"{UNICODE_FSI}{part}{UNICODE_PDI}")
                else:
                    parts.append(part)

            return FluentString("".join(parts))
        finally:
            ctx.pop(pattern)

    def _resolve_placeable(self, placeable: Placeable, ctx: ResolutionContext) -> FluentType:
        if ctx.is_depth_exceeded():
            return self._depth_exceeded(ctx)

        ctx.expression_depth += 1
        try:
            return self._resolve(placeable.expression, ctx)
        finally:
            ctx.expression_depth -= 1

    @staticmethod
    def _depth_exceeded(ctx: ResolutionContext) -> FluentNone:
        logger.debug("Resolution depth limit %d reached", ctx.max_depth)
        ctx.report(FluentRangeError(ErrorTemplate.max_depth_exceeded(ctx.max_depth)))
        return FluentNone()

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def _resolve_message(self, message: Message, ctx: ResolutionContext) -> FluentType:
        if message.value is None:
            ctx.report(FluentRangeError(ErrorTemplate.message_no_value(message.id.name)))
            return FluentNone(message.id.name)
        return self._resolve_pattern(message.value, ctx)

    def _lookup(
        self, ref: MessageReference | TermReference, ctx: ResolutionContext
    ) -> Message | Term | FluentNone:
        """Find the entry a reference points to.

        Terms keep their leading ``-`` in both the reference and the store.
        """
        name = ref.id.name
        entry: Message | Term | None
        if isinstance(ref, TermReference):
            entry = self._host.get_term(name)
            if entry is None:
                ctx.report(FluentReferenceError(ErrorTemplate.term_not_found(name)))
        else:
            entry = self._host.get_message(name)
            if entry is None:
                ctx.report(FluentReferenceError(ErrorTemplate.message_not_found(name)))
        return FluentNone(name) if entry is None else entry

    def _resolve_attribute_expression(
        self, expr: AttributeExpression, ctx: ResolutionContext
    ) -> FluentType:
        """Resolve ``ref.name``, falling back to the entry's own value."""
        entry = self._lookup(expr.ref, ctx)
        if isinstance(entry, FluentNone):
            return entry

        attribute = entry.get_attribute(expr.name.name)
        if attribute is not None:
            return self._resolve_pattern(attribute.value, ctx)

        ctx.report(FluentReferenceError(ErrorTemplate.attribute_not_found(expr.name.name)))
        return self._resolve(entry, ctx)

    def _resolve_variant_expression(
        self, expr: VariantExpression, ctx: ResolutionContext
    ) -> FluentType:
        """Resolve ``-term[key]`` against a term whose value is a variant list.

        An unknown key, or a term without variants, falls back to the
        term's own value.
        """
        term = self._lookup(expr.ref, ctx)
        if isinstance(term, FluentNone):
            return term

        keyword = self._resolve(expr.key, ctx)

        if isinstance(term.value, VariantList):
            for variant in term.value.variants:
                key = self._resolve(variant.key, ctx)
                if key.match(self._host, keyword):
                    return self._resolve_value(variant.value, ctx)

        ctx.report(
            FluentReferenceError(ErrorTemplate.variant_not_found(keyword.format(self._host)))
        )
        return self._resolve(term, ctx)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _default_variant(
        self, variants: Sequence[Variant], default_index: int, ctx: ResolutionContext
    ) -> Value | None:
        if 0 <= default_index < len(variants):
            return variants[default_index].value
        ctx.report(FluentRangeError(ErrorTemplate.no_default_variant()))
        return None

    def _resolve_select_expression(
        self, expr: SelectExpression, ctx: ResolutionContext
    ) -> FluentType:
        """Pick a variant by matching the selector against each key in order.

        Only number and symbol keys take part in matching. Without a
        selector, or when the selector failed to resolve, the default
        variant is used.
        """
        if expr.selector is None:
            return self._resolve_value(
                self._default_variant(expr.variants, expr.default_index, ctx), ctx
            )

        selector = self._resolve(expr.selector, ctx)
        if not isinstance(selector, FluentNone):
            for variant in expr.variants:
                key = self._resolve_key(variant.key)
                if key.match(self._host, selector):
                    return self._resolve_value(variant.value, ctx)

        return self._resolve_value(
            self._default_variant(expr.variants, expr.default_index, ctx), ctx
        )

    @staticmethod
    def _resolve_key(key: VariantKey) -> FluentNumber | FluentSymbol:
        if isinstance(key, NumberLiteral):
            return FluentNumber(key.value)
        return FluentSymbol(key.name)

    # ------------------------------------------------------------------
    # Variables and functions
    # ------------------------------------------------------------------

    def _resolve_variable(self, expr: VariableReference, ctx: ResolutionContext) -> FluentType:
        """Wrap a caller-supplied variable in the matching value type.

        bool is rejected even though it is an int subclass.
        """
        name = expr.id.name
        if name not in ctx.args:
            ctx.report(FluentReferenceError(ErrorTemplate.variable_not_provided(name)))
            return FluentNone(name)

        value = ctx.args[name]
        match value:
            case FluentType():
                return value
            case bool():
                pass
            case str():
                return FluentString(value)
            case int() | float() | Decimal():
                try:
                    return FluentNumber.from_number(value)
                except ValueError as e:
                    ctx.report(FluentTypeError(ErrorTemplate.invalid_number(name, str(e))))
                    return FluentNone(name)
            case date():
                return FluentDateTime(value)

        ctx.report(
            FluentTypeError(ErrorTemplate.unsupported_variable_type(name, type(value).__name__))
        )
        return FluentNone(name)

    def _resolve_call(self, expr: CallExpression, ctx: ResolutionContext) -> FluentType:
        """Call a custom or built-in function with resolved arguments.

        TypeError and ValueError raised by the function are reported as
        FluentTypeError; the call then renders as ``NAME()``.
        """
        name = expr.callee.name
        fallback = FluentNone(f"{name}()")

        func = self._host.get_function(name)
        if func is None:
            ctx.report(FluentReferenceError(ErrorTemplate.function_not_found(name)))
            return fallback

        positional = [self._resolve(arg, ctx) for arg in expr.positional]
        named = {arg.name.name: self._resolve_named(arg, ctx) for arg in expr.named}

        try:
            result = func(positional, named)
        except (TypeError, ValueError) as e:
            logger.debug("Function %s() failed: %s", name, e)
            ctx.report(FluentTypeError(ErrorTemplate.function_failed(name, str(e))))
            return fallback

        if not isinstance(result, FluentType):
            message = f"returned {type(result).__name__}, expected a FluentType"
            ctx.report(FluentTypeError(ErrorTemplate.function_failed(name, message)))
            return fallback

        return result

    def _resolve_named(self, arg: NamedArgument, ctx: ResolutionContext) -> FluentType:
        return self._resolve(arg.value, ctx)


def resolve(
    host: ResolverHost,
    node: Message | Attribute | Pattern,
    args: Mapping[str, FluentArg] | None = None,
    errors: list[FluentError] | None = None,
) -> str:
    """Resolve ``node`` against ``host`` in one call.

    Convenience function for FluentResolver(host).resolve().
    """
    return FluentResolver(host).resolve(node, args, errors)
