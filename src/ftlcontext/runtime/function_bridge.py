"""Function registry bridging Python callables to FTL call expressions.

FTL calls a function by its uppercase name, ``{ NUMBER($count) }``. The
registry maps those names to Python callables sharing one calling
convention: resolved positional arguments as a list, named arguments as a
dict, both already converted to Fluent values.

Architecture:
    - FluentFunction: Protocol every registered callable satisfies
    - FunctionRegistry: Name validation, lookup and dict-like introspection

Example:
    >>> def shout(positional, named):
    ...     return FluentString(positional[0].value.upper())
    >>> registry = FunctionRegistry()
    >>> registry.register("SHOUT", shout)
    >>> "SHOUT" in registry
    True

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterator
from typing import Protocol

from ftlcontext.constants import FUNCTION_NAME_PATTERN

from .value_types import FluentType

__all__ = ["FluentFunction", "FunctionRegistry"]

_FUNCTION_NAME = re.compile(FUNCTION_NAME_PATTERN)


class FluentFunction(Protocol):
    """Protocol for Fluent-compatible functions.

    Functions receive:
    - positional: Resolved positional arguments
    - named: Resolved named arguments by name

    And return a FluentType. Raising TypeError or ValueError reports a
    FluentTypeError and makes the call render as ``NAME()``.
    """

    def __call__(
        self,
        positional: list[FluentType],
        named: dict[str, FluentType],
        /,
    ) -> FluentType:
        ...  # pragma: no cover  # Protocol stub - not executable


class FunctionRegistry:
    """Name-to-callable mapping for FTL functions.

    Supports dict-like introspection:
        - get(name): Look up a function
        - __iter__: Iterate over function names
        - __len__: Count registered functions
        - __contains__: Check if function exists (supports 'in' operator)

    Memory Optimization:
        Uses __slots__ for memory efficiency (avoids per-instance __dict__).

    Example:
        >>> registry = FunctionRegistry()
        >>> registry.register("CUSTOM", my_func)
        >>> len(registry)
        1
        >>> list(registry)
        ['CUSTOM']
    """

    __slots__ = ("_frozen", "_functions")

    def __init__(self) -> None:
        """Initialize empty function registry."""
        self._functions: dict[str, FluentFunction] = {}
        self._frozen = False

    def register(self, name: str, func: FluentFunction) -> None:
        """Register a Python callable under an FTL function name.

        Registering an existing name replaces the earlier function.

        Args:
            name: FTL function name matching ``[A-Z][A-Z_?-]*``
            func: Callable following the FluentFunction protocol

        Raises:
            ValueError: If the name is not a valid FTL function name
            TypeError: If func is not callable, or the registry is frozen
        """
        if self._frozen:
            msg = "Cannot register functions on a frozen registry; use copy() first"
            raise TypeError(msg)
        if not _FUNCTION_NAME.match(name):
            msg = f"Invalid function name {name!r}: expected uppercase [A-Z][A-Z_?-]*"
            raise ValueError(msg)
        if not callable(func):
            msg = f"Function {name} must be callable, got {type(func).__name__}"
            raise TypeError(msg)
        self._functions[name] = func

    def get(self, name: str) -> FluentFunction | None:
        """Return the function registered as ``name``, or None."""
        return self._functions.get(name)

    def freeze(self) -> None:
        """Reject further registrations.

        Used for the shared built-in registry, so one context cannot change
        the functions seen by another.
        """
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "FunctionRegistry":
        """Create a shallow, unfrozen copy of this registry.

        Returns:
            New FunctionRegistry instance with the same functions.
        """
        new_registry = FunctionRegistry()
        new_registry._functions = self._functions.copy()
        return new_registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(FunctionRegistry())
            'FunctionRegistry(functions=0)'
        """
        return f"FunctionRegistry(functions={len(self._functions)})"
