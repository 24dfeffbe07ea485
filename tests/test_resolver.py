"""Tests for the Fluent resolver.

Resolution never raises: every failure is appended to the caller's error
list and the output shows a fallback. These tests check both the output
and the errors.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlcontext.constants import MAX_PLACEABLE_LENGTH
from ftlcontext.diagnostics import (
    FluentCyclicReferenceError,
    FluentError,
    FluentRangeError,
    FluentReferenceError,
    FluentTypeError,
)
from ftlcontext.runtime import MessageContext
from ftlcontext.runtime.resolver import FluentResolver, resolve, unescape
from ftlcontext.runtime.value_types import FluentArg, FluentNumber, FluentString, FluentType
from ftlcontext.syntax.ast import (
    Expression,
    Identifier,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TextElement,
    VariableReference,
    Variant,
    VariantName,
)

FSI = "⁨"
PDI = "⁩"


def _context(source: str, **kwargs: object) -> MessageContext:
    ctx = MessageContext("en-US", **kwargs)  # type: ignore[arg-type]
    assert ctx.add_messages(source) == []
    return ctx


def _format(
    ctx: MessageContext, message_id: str, args: dict[str, FluentArg] | None = None
) -> tuple[str | None, list[FluentError]]:
    errors: list[FluentError] = []
    message = ctx.get_message(message_id)
    assert message is not None
    return ctx.format(message, args, errors), errors


# ============================================================================
# BIDI ISOLATION
# ============================================================================


class TestIsolation:
    """Test FSI/PDI wrapping of placeables."""

    def test_placeable_with_text_is_isolated(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo } Bar")

        assert _format(ctx, "bar") == (f"{FSI}Foo{PDI} Bar", [])

    def test_lone_placeable_is_not_isolated(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo }")

        assert _format(ctx, "bar") == ("Foo", [])

    def test_isolation_disabled(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo } Bar", use_isolating=False)

        assert _format(ctx, "bar") == ("Foo Bar", [])

    def test_every_placeable_isolated(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo } { foo }")

        assert _format(ctx, "bar") == (f"{FSI}Foo{PDI} {FSI}Foo{PDI}", [])


# ============================================================================
# VARIABLES
# ============================================================================


class TestVariables:
    """Test caller-supplied variables."""

    @pytest.fixture
    def ctx(self) -> MessageContext:
        return _context("hello = Hello { $name }", use_isolating=False)

    def test_string(self, ctx: MessageContext) -> None:
        assert _format(ctx, "hello", {"name": "Anna"}) == ("Hello Anna", [])

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1234, "1,234"), (Decimal("1.50"), "1.50"), (1.5, "1.5"), (-2, "-2")],
    )
    def test_numbers(self, ctx: MessageContext, value: FluentArg, expected: str) -> None:
        assert _format(ctx, "hello", {"name": value}) == (f"Hello {expected}", [])

    def test_date(self, ctx: MessageContext) -> None:
        assert _format(ctx, "hello", {"name": date(2024, 1, 5)}) == ("Hello Jan 5, 2024", [])

    def test_fluent_type_passes_through(self, ctx: MessageContext) -> None:
        assert _format(ctx, "hello", {"name": FluentNumber("2.50")}) == ("Hello 2.50", [])

    def test_missing_variable(self, ctx: MessageContext) -> None:
        result, errors = _format(ctx, "hello", {})

        assert result == "Hello name"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentReferenceError)
        assert str(errors[0]) == "Unknown variable: $name"

    @pytest.mark.parametrize("value", [True, [1], object()])
    def test_unsupported_type(self, ctx: MessageContext, value: object) -> None:
        result, errors = _format(ctx, "hello", {"name": value})  # type: ignore[dict-item]

        assert result == "Hello name"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentTypeError)

    def test_signalling_nan(self, ctx: MessageContext) -> None:
        result, errors = _format(ctx, "hello", {"name": Decimal("sNaN")})

        assert result == "Hello name"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentTypeError)
        assert str(errors[0]).startswith("Invalid number: $name")

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("-Infinity"), float("inf")])
    def test_non_finite_numbers(self, ctx: MessageContext, value: FluentArg) -> None:
        result, errors = _format(ctx, "hello", {"name": value})

        assert errors == []
        assert result is not None
        assert result != "Hello name"

    @given(st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=100))
    def test_any_string_is_inserted_verbatim(self, value: str) -> None:
        """PROPERTY: String variables are inserted unchanged."""
        ctx = MessageContext("en", use_isolating=False)
        ctx.add_messages("hello = Hello { $name }")

        assert _format(ctx, "hello", {"name": value}) == (f"Hello {value}", [])


# ============================================================================
# SELECT EXPRESSIONS
# ============================================================================


class TestSelectExpressions:
    """Test variant selection."""

    def test_unresolvable_selector_uses_default(self) -> None:
        ctx = _context("foo =\n    { $none ->\n       *[a] A\n        [b] B\n    }")
        result, errors = _format(ctx, "foo")

        assert result == "A"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentReferenceError)

    @pytest.mark.parametrize(("n", "expected"), [(1, "B"), (2, "A")])
    def test_numeric_keys(self, n: int, expected: str) -> None:
        ctx = _context("foo =\n    { $n ->\n       *[a] A\n        [1] B\n    }")

        assert _format(ctx, "foo", {"n": n}) == (expected, [])

    def test_plural_category_of_literal(self) -> None:
        ctx = _context("foo =\n    { 1 ->\n       *[one] A\n        [other] B\n    }")

        assert _format(ctx, "foo") == ("A", [])

    @pytest.mark.parametrize(("n", "expected"), [(1, "1 item"), (5, "5 items")])
    def test_plural_category_of_variable(self, n: int, expected: str) -> None:
        ctx = _context(
            "items =\n    { $n ->\n        [one] { $n } item\n       *[other] { $n } items\n    }",
            use_isolating=False,
        )

        assert _format(ctx, "items", {"n": n}) == (expected, [])

    def test_exact_number_before_category(self) -> None:
        """Keys are tried in order, so [0] wins over the category it belongs to."""
        ctx = _context(
            "foo =\n    { $n ->\n        [0] none\n        [one] one\n       *[other] many\n    }"
        )

        assert _format(ctx, "foo", {"n": 0}) == ("none", [])

    def test_string_selector(self) -> None:
        ctx = _context("foo =\n    { $g ->\n       *[male] his\n        [female] her\n    }")

        assert _format(ctx, "foo", {"g": "female"}) == ("her", [])
        assert _format(ctx, "foo", {"g": "other"}) == ("his", [])

    def test_term_attribute_selector(self) -> None:
        ctx = _context(
            "-brand = Firefox\n"
            "    .gender = feminine\n"
            "foo =\n"
            "    { -brand.gender ->\n"
            "       *[masculine] his\n"
            "        [feminine] her\n"
            "    }"
        )

        assert _format(ctx, "foo") == ("her", [])

    def test_missing_default_variant(self) -> None:
        select = SelectExpression(
            VariableReference(Identifier("x")),
            (Variant(VariantName("a"), Pattern((TextElement("A"),))),),
        )
        errors: list[FluentError] = []

        result = resolve(MessageContext("en"), Pattern((Placeable(select),)), {}, errors)

        assert result == "???"
        assert [type(e) for e in errors] == [FluentReferenceError, FluentRangeError]


# ============================================================================
# REFERENCES
# ============================================================================


class TestReferences:
    """Test message, term, attribute and variant references."""

    def test_missing_message(self) -> None:
        ctx = _context("foo = { missing }")
        result, errors = _format(ctx, "foo")

        assert result == "missing"
        assert isinstance(errors[0], FluentReferenceError)

    def test_term(self) -> None:
        ctx = _context("-brand = Firefox\nfoo = { -brand }")

        assert _format(ctx, "foo") == ("Firefox", [])

    def test_missing_term(self) -> None:
        ctx = _context("foo = { -missing }")
        result, errors = _format(ctx, "foo")

        assert result == "-missing"
        assert str(errors[0]) == "Unknown term: -missing"

    def test_attribute(self) -> None:
        ctx = _context("foo = Foo\n    .title = Title\nbar = { foo.title }")

        assert _format(ctx, "bar") == ("Title", [])

    def test_missing_attribute_falls_back_to_value(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo.title }")
        result, errors = _format(ctx, "bar")

        assert result == "Foo"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentReferenceError)

    def test_message_without_value(self) -> None:
        ctx = _context("foo =\n    .attr = A\nbar = { foo }")
        result, errors = _format(ctx, "bar")

        assert result == "foo"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentRangeError)
        assert str(errors[0]) == "No value"

    @pytest.fixture
    def brand(self) -> str:
        return (
            "-brand =\n"
            "    {\n"
            "       *[nominative] Firefox\n"
            "        [locative] Firefoxie\n"
            "    }\n"
        )

    def test_term_variant_list_default(self, brand: str) -> None:
        ctx = _context(brand + "foo = { -brand }")

        assert _format(ctx, "foo") == ("Firefox", [])

    def test_variant_expression(self, brand: str) -> None:
        ctx = _context(brand + "foo = { -brand[locative] }")

        assert _format(ctx, "foo") == ("Firefoxie", [])

    def test_unknown_variant_falls_back_to_default(self, brand: str) -> None:
        ctx = _context(brand + "foo = { -brand[genitive] }")
        result, errors = _format(ctx, "foo")

        assert result == "Firefox"
        assert str(errors[0]) == "Unknown variant: genitive"


# ============================================================================
# CYCLES
# ============================================================================


class TestCycles:
    """Test cycle detection through the set of patterns being resolved."""

    def test_self_reference(self) -> None:
        ctx = _context("foo = { foo }")
        result, errors = _format(ctx, "foo")

        assert result == "???"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentCyclicReferenceError)

    def test_mutual_reference(self) -> None:
        ctx = _context("foo = { bar }\nbar = { foo }")
        result, errors = _format(ctx, "foo")

        assert result == "???"
        assert isinstance(errors[0], FluentCyclicReferenceError)

    def test_cycle_through_term(self) -> None:
        ctx = _context("-a = { -b }\n-b = { -a }\nfoo = { -a }")
        result, errors = _format(ctx, "foo")

        assert result == "???"
        assert isinstance(errors[0], FluentCyclicReferenceError)

    def test_repeated_reference_is_not_a_cycle(self) -> None:
        ctx = _context("foo = Foo\nbar = { foo }{ foo }", use_isolating=False)

        assert _format(ctx, "bar") == ("FooFoo", [])


def _chain(length: int) -> str:
    lines = [f"m{i} = {{ m{i + 1} }}" for i in range(length)]
    lines.append(f"m{length} = end")
    return "\n".join(lines)


class TestDepthLimit:
    """Test the bound on non-cyclic reference chains and nested placeables."""

    def test_short_chain_resolves(self) -> None:
        ctx = _context(_chain(50))

        assert _format(ctx, "m0") == ("end", [])

    def test_long_chain_stops_at_limit(self) -> None:
        ctx = _context(_chain(200))
        result, errors = _format(ctx, "m0")

        assert result == "???"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentRangeError)
        assert not isinstance(errors[0], FluentCyclicReferenceError)
        assert str(errors[0]) == "Maximum resolution depth (100) exceeded"

    def test_nested_placeables_at_parser_limit_resolve(self) -> None:
        ctx = _context("foo = " + "{" * 100 + '"x"' + "}" * 100)

        assert _format(ctx, "foo") == ("x", [])

    def test_depth_limit_on_constructed_pattern(self) -> None:
        ctx = _context("foo = Foo")
        node: Expression = StringLiteral("deep")
        for _ in range(149):
            node = Placeable(node)
        errors: list[FluentError] = []

        result = ctx.format(Pattern((Placeable(node),)), None, errors)

        assert result == "???"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentRangeError)


# ============================================================================
# FUNCTIONS
# ============================================================================


def _pick(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    which = named.get("which")
    if which is not None and which.value == "second":
        return positional[1]
    return positional[0]


def _broken(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    msg = "bad input"
    raise ValueError(msg)


def _not_a_value(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    return "plain str"  # type: ignore[return-value]


class TestFunctions:
    """Test built-in and custom function calls."""

    def test_number(self) -> None:
        ctx = _context("foo = { NUMBER($n) }")

        assert _format(ctx, "foo", {"n": 1234}) == ("1,234", [])

    def test_builtin_type_error(self) -> None:
        ctx = _context("foo = { NUMBER($s) }")
        result, errors = _format(ctx, "foo", {"s": "x"})

        assert result == "NUMBER()"
        assert isinstance(errors[0], FluentTypeError)

    def test_unknown_function(self) -> None:
        ctx = _context("foo = { MISSING() }")
        result, errors = _format(ctx, "foo")

        assert result == "MISSING()"
        assert isinstance(errors[0], FluentReferenceError)

    def test_custom_function_with_named_argument(self) -> None:
        ctx = _context('foo = { PICK("a", "b", which: "second") }', functions={"PICK": _pick})

        assert _format(ctx, "foo") == ("b", [])

    def test_failing_function(self) -> None:
        ctx = _context("foo = { BROKEN() }", functions={"BROKEN": _broken})
        result, errors = _format(ctx, "foo")

        assert result == "BROKEN()"
        assert str(errors[0]) == "Function BROKEN() failed: bad input"

    def test_function_must_return_fluent_type(self) -> None:
        ctx = _context("foo = { BAD() }", functions={"BAD": _not_a_value})
        result, errors = _format(ctx, "foo")

        assert result == "BAD()"
        assert isinstance(errors[0], FluentTypeError)


# ============================================================================
# TEXT
# ============================================================================


class TestText:
    """Test escapes, transforms and the placeable length limit."""

    def test_escapes_decoded(self) -> None:
        ctx = _context("foo = \\{ braces \\u0041 \\\\")

        assert _format(ctx, "foo") == ("{ braces A \\", [])

    def test_string_literal_escapes(self) -> None:
        ctx = _context('foo = { "\\"quoted\\" \\u0042" }')

        assert _format(ctx, "foo") == ('"quoted" B', [])

    def test_transform_applies_to_text_only(self) -> None:
        ctx = _context(
            'foo = Hello { $name } { "lit" }', use_isolating=False, transform=str.upper
        )

        assert _format(ctx, "foo", {"name": "anna"}) == ("HELLO anna lit", [])

    def test_placeable_too_long(self) -> None:
        ctx = _context("foo = { $long }!", use_isolating=False)
        result, errors = _format(ctx, "foo", {"long": "x" * 3000})

        assert result == "x" * MAX_PLACEABLE_LENGTH + "!"
        assert len(errors) == 1
        assert isinstance(errors[0], FluentRangeError)

    def test_unescape(self) -> None:
        assert unescape(r"\{ \\ \" é") == '{ \\ " é'
        assert unescape("plain") == "plain"


# ============================================================================
# RESOLVER API
# ============================================================================


class TestResolverApi:
    """Test FluentResolver and resolve() directly."""

    def test_resolve_pattern(self) -> None:
        ctx = MessageContext("en")
        pattern = Pattern((TextElement("Hi "), Placeable(VariableReference(Identifier("x")))))

        assert resolve(ctx, pattern, {"x": FluentString("you")}) == f"Hi {FSI}you{PDI}"

    def test_errors_default_to_private_list(self) -> None:
        ctx = MessageContext("en")
        pattern = Pattern((Placeable(VariableReference(Identifier("x"))),))

        assert FluentResolver(ctx).resolve(pattern) == "x"

    def test_errors_appended_to_existing_list(self) -> None:
        ctx = _context("foo = { $a }{ $b }")
        message = ctx.get_message("foo")
        assert message is not None
        errors: list[FluentError] = [FluentError("earlier")]

        ctx.format(message, {}, errors)

        assert len(errors) == 3
