"""Per-call resolution state.

Every resolve call gets its own ResolutionContext; nothing is shared between
calls or threads. It carries the caller's variables, the error sink, and the
set of patterns currently being resolved, which is how cycles are detected.
The size of that set and the count of nested placeables are bounded by
max_depth, so long reference chains stop before the Python stack runs out.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ftlcontext.constants import MAX_DEPTH

if TYPE_CHECKING:
    from ftlcontext.diagnostics import FluentError
    from ftlcontext.syntax.ast import Pattern

    from .value_types import FluentArg

__all__ = ["ResolutionContext"]


@dataclass(slots=True)
class ResolutionContext:
    """Explicit context for one resolution.

    Patterns are tracked by object identity: two equal patterns from
    different messages are different entries.

    Attributes:
        args: Variables passed by the caller
        errors: Sink that resolution errors are appended to
        dirty: Identities of the patterns being resolved right now
        max_depth: Maximum pattern depth, and maximum placeable nesting
        expression_depth: Placeables being resolved right now
    """

    args: Mapping[str, FluentArg] = field(default_factory=dict)
    errors: list[FluentError] = field(default_factory=list)
    dirty: set[int] = field(default_factory=set)
    max_depth: int = MAX_DEPTH
    expression_depth: int = 0

    def push(self, pattern: Pattern) -> None:
        """Mark a pattern as being resolved."""
        self.dirty.add(id(pattern))

    def pop(self, pattern: Pattern) -> None:
        """Unmark a pattern once its resolution finished."""
        self.dirty.discard(id(pattern))

    def contains(self, pattern: Pattern) -> bool:
        """Check if pattern is being resolved (cycle detection)."""
        return id(pattern) in self.dirty

    @property
    def depth(self) -> int:
        """Current pattern depth.

        A pattern is never in the dirty set twice, so its size is the depth.
        """
        return len(self.dirty)

    def is_depth_exceeded(self) -> bool:
        """Check if maximum depth has been exceeded."""
        return self.depth >= self.max_depth or self.expression_depth >= self.max_depth

    def report(self, error: FluentError) -> None:
        self.errors.append(error)
