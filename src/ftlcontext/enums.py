"""Enumerations for ftlcontext type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class CommentLevel(IntEnum):
    """Nesting level of an FTL comment, equal to the number of ``#`` minus one."""

    COMMENT = 0
    """Standalone comment: # This is a comment"""

    GROUP = 1
    """Group comment: ## Group Title"""

    RESOURCE = 2
    """Resource comment: ### Resource Description"""

    @property
    def sigil(self) -> str:
        """Comment prefix as written in source ("#", "##" or "###")."""
        return "#" * (self.value + 1)


class ReferenceKind(StrEnum):
    """Kind of reference (message or term).

    StrEnum provides automatic string conversion: str(ReferenceKind.MESSAGE) == "message"
    """

    MESSAGE = "message"
    """Reference to a message: { message-id }"""

    TERM = "term"
    """Reference to a term: { -term-id }"""


__all__ = [
    "CommentLevel",
    "ReferenceKind",
]
