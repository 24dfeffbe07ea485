"""Tests for built-in functions and the function registry."""

from __future__ import annotations

from datetime import date

import pytest

from ftlcontext.runtime.function_bridge import FunctionRegistry
from ftlcontext.runtime.functions import (
    create_default_registry,
    datetime_function,
    get_shared_registry,
    number_function,
)
from ftlcontext.runtime.value_types import FluentDateTime, FluentNumber, FluentString, FluentType


def _upper(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    return FluentString(str(positional[0].value).upper())


# ============================================================================
# BUILT-INS
# ============================================================================


class TestBuiltins:
    """Test NUMBER and DATETIME."""

    def test_number_passes_through(self) -> None:
        value = FluentNumber("3")

        assert number_function([value], {}) is value

    def test_number_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="FluentNumber"):
            number_function([FluentString("3")], {})

    @pytest.mark.parametrize("count", [0, 2])
    def test_number_requires_one_argument(self, count: int) -> None:
        with pytest.raises(TypeError, match="exactly one argument"):
            number_function([FluentNumber("1")] * count, {})

    def test_datetime_passes_through(self) -> None:
        value = FluentDateTime(date(2024, 1, 5))

        assert datetime_function([value], {}) is value

    def test_datetime_rejects_numbers(self) -> None:
        with pytest.raises(TypeError, match="FluentDateTime"):
            datetime_function([FluentNumber("1")], {})


# ============================================================================
# REGISTRY
# ============================================================================


class TestFunctionRegistry:
    """Test FunctionRegistry."""

    def test_register_and_get(self) -> None:
        registry = FunctionRegistry()
        registry.register("UPPER", _upper)

        assert registry.get("UPPER") is _upper
        assert "UPPER" in registry
        assert list(registry) == ["UPPER"]
        assert len(registry) == 1

    def test_get_missing(self) -> None:
        assert FunctionRegistry().get("NOPE") is None

    @pytest.mark.parametrize("name", ["upper", "1UP", "", "UP PER"])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid function name"):
            FunctionRegistry().register(name, _upper)

    def test_not_callable(self) -> None:
        with pytest.raises(TypeError, match="callable"):
            FunctionRegistry().register("UPPER", "not a function")  # type: ignore[arg-type]

    def test_frozen_rejects_registration(self) -> None:
        registry = FunctionRegistry()
        registry.freeze()

        assert registry.frozen
        with pytest.raises(TypeError, match="frozen"):
            registry.register("UPPER", _upper)

    def test_copy_is_unfrozen_and_isolated(self) -> None:
        registry = create_default_registry()
        registry.freeze()

        copied = registry.copy()
        copied.register("UPPER", _upper)

        assert not copied.frozen
        assert "UPPER" in copied
        assert "UPPER" not in registry

    def test_repr(self) -> None:
        assert repr(create_default_registry()) == "FunctionRegistry(functions=2)"

    def test_default_registry(self) -> None:
        registry = create_default_registry()

        assert registry.get("NUMBER") is number_function
        assert registry.get("DATETIME") is datetime_function
        assert create_default_registry() is not registry

    def test_shared_registry_is_frozen_singleton(self) -> None:
        shared = get_shared_registry()

        assert shared is get_shared_registry()
        assert shared.frozen
        assert "NUMBER" in shared
