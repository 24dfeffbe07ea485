"""Fluent built-in functions.

Implements NUMBER and DATETIME. Both take exactly one argument of their own
value type and return it unchanged; formatting happens when the value is
written into the output, in the context's locale.

FTL Usage:
    items = { NUMBER($count) } items
    updated = Last update: { DATETIME($when) }

Python 3.13+.
"""

import logging

from .function_bridge import FunctionRegistry
from .value_types import FluentDateTime, FluentNumber, FluentType

__all__ = [
    "create_default_registry",
    "datetime_function",
    "get_shared_registry",
    "number_function",
]

logger = logging.getLogger(__name__)


def _single_argument(name: str, positional: list[FluentType]) -> FluentType:
    if len(positional) != 1:
        msg = f"{name}() takes exactly one argument ({len(positional)} given)"
        raise TypeError(msg)
    return positional[0]


def number_function(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    """NUMBER(): pass a number through.

    Raises:
        TypeError: Unless called with exactly one FluentNumber
    """
    value = _single_argument("NUMBER", positional)
    if not isinstance(value, FluentNumber):
        msg = f"NUMBER() expected an argument of type FluentNumber, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def datetime_function(positional: list[FluentType], named: dict[str, FluentType]) -> FluentType:
    """DATETIME(): pass a date or datetime through.

    Raises:
        TypeError: Unless called with exactly one FluentDateTime
    """
    value = _single_argument("DATETIME", positional)
    if not isinstance(value, FluentDateTime):
        msg = (
            f"DATETIME() expected an argument of type FluentDateTime, "
            f"got {type(value).__name__}"
        )
        raise TypeError(msg)
    return value


def create_default_registry() -> FunctionRegistry:
    """Create a new FunctionRegistry with built-in FTL functions registered.

    Returns a fresh, isolated registry instance containing the standard Fluent
    functions (NUMBER, DATETIME). Each call returns a new instance, so callers
    may add their own functions to it.

    Example:
        >>> registry = create_default_registry()
        >>> "NUMBER" in registry
        True
        >>> registry.register("CUSTOM", my_custom_func)
        >>> ctx = MessageContext("en", functions=registry)

    See Also:
        get_shared_registry: Returns a shared cached registry for performance.
    """
    registry = FunctionRegistry()
    registry.register("NUMBER", number_function)
    registry.register("DATETIME", datetime_function)
    return registry


# Module-level cached default registry for sharing across contexts.
# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: FunctionRegistry | None = None


def get_shared_registry() -> FunctionRegistry:
    """Get a shared, frozen FunctionRegistry with built-in functions.

    Every MessageContext without custom functions resolves built-ins
    through this registry.

    Immutability:
        The returned registry is FROZEN. Calling register() on it will raise
        TypeError. To add custom functions, use copy() or
        create_default_registry().

    Returns:
        Frozen shared FunctionRegistry with NUMBER and DATETIME.
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
        logger.debug("Created shared function registry: %s", list(_SHARED_REGISTRY))
    return _SHARED_REGISTRY
