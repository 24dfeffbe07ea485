"""Core value types for the Fluent runtime.

Defines the values the resolver works with:
    - FluentNone: Placeholder for a missing value, formatted as its name
    - FluentString: Plain text
    - FluentNumber: Number keeping its source text and visible precision
    - FluentDateTime: Date or datetime
    - FluentSymbol: Variant name, matched against strings and plural categories
    - FluentArg: Union of everything a caller may pass as a variable

Every value formats itself for a context and matches against a variant
key. Matching never raises; a value of another kind simply does not match.

Python 3.13+. Uses Babel for number and date formatting.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Protocol

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from ftlcontext.constants import FALLBACK_NONE
from ftlcontext.locale_utils import first_known_locale, get_babel_locale

from .plural_rules import select_category

if TYPE_CHECKING:
    from collections.abc import Sequence

    from babel import Locale

__all__ = [
    "FluentArg",
    "FluentDateTime",
    "FluentNone",
    "FluentNumber",
    "FluentString",
    "FluentSymbol",
    "FluentType",
    "FormatContext",
]

# Locale used for formatting when none of the context locales is known to Babel.
_DEFAULT_FORMAT_LOCALE: str = "en_US"

# Babel pattern for the integer part of a formatted number.
_INTEGER_PATTERN: str = "#,##0"

_DATE_STYLE: str = "medium"


class FormatContext(Protocol):
    """What a value needs from its context: the locale chain."""

    @property
    def locales(self) -> Sequence[str]: ...

    @property
    def locale(self) -> str: ...


def _babel_locale(ctx: FormatContext) -> Locale:
    return first_known_locale(ctx.locales) or get_babel_locale(_DEFAULT_FORMAT_LOCALE)


class FluentType(ABC):
    """Base of the Fluent value family."""

    __slots__ = ()

    value: object

    @abstractmethod
    def format(self, ctx: FormatContext) -> str:
        """Format the value for output in the context's locale."""

    @abstractmethod
    def match(self, ctx: FormatContext, other: object) -> bool:
        """Check whether ``other`` selects this value."""


@dataclass(frozen=True, slots=True)
class FluentNone(FluentType):
    """Missing value.

    Formats as its name, e.g. the id of an unknown message, so the output
    still shows where the problem is.

    Example:
        >>> FluentNone("missing-id").format(ctx)
        'missing-id'
        >>> FluentNone().format(ctx)
        '???'
    """

    value: str | None = None

    def format(self, ctx: FormatContext) -> str:
        return self.value or FALLBACK_NONE

    def match(self, ctx: FormatContext, other: object) -> bool:
        return isinstance(other, FluentNone)


@dataclass(frozen=True, slots=True)
class FluentString(FluentType):
    value: str

    def format(self, ctx: FormatContext) -> str:
        return self.value

    def match(self, ctx: FormatContext, other: object) -> bool:
        match other:
            case FluentString(value=value):
                return value == self.value
            case str():
                return other == self.value
        return False


@dataclass(frozen=True, slots=True)
class FluentNumber(FluentType):
    """Number carrying its source text.

    The text decides how many fraction digits are shown, so "1.50" keeps
    its trailing zero, and feeds the CLDR plural operands.

    Attributes:
        value: Number as written, e.g. "-3.14"
        number: Parsed Decimal value

    Raises:
        ValueError: If the text is not a number, or is a signalling NaN

    Example:
        >>> FluentNumber("1.50").format(ctx)  # en-US
        '1.50'
        >>> FluentNumber("1234").format(ctx)
        '1,234'
    """

    value: str
    number: Decimal = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            number = Decimal(self.value)
        except InvalidOperation as e:
            msg = f"Not a number: {self.value!r}"
            raise ValueError(msg) from e
        if number.is_snan():
            msg = f"Signalling NaN is not a number: {self.value!r}"
            raise ValueError(msg)
        object.__setattr__(self, "number", number)

    @classmethod
    def from_number(cls, n: int | float | Decimal) -> FluentNumber:
        return cls(str(n))

    @property
    def precision(self) -> int:
        """Visible fraction digit count (CLDR v operand)."""
        exponent = self.number.as_tuple().exponent
        if isinstance(exponent, int) and exponent < 0:
            return -exponent
        return 0

    def format(self, ctx: FormatContext) -> str:
        pattern = _INTEGER_PATTERN
        if self.precision:
            pattern = f"{pattern}.{'0' * self.precision}"
        return str(
            babel_numbers.format_decimal(self.number, format=pattern, locale=_babel_locale(ctx))
        )

    def match(self, ctx: FormatContext, other: object) -> bool:
        match other:
            case FluentNumber(number=number):
                return number == self.number
            case bool():
                return False
            case int() | Decimal():
                return other == self.number
            case float():
                return Decimal(str(other)) == self.number
        return False


@dataclass(frozen=True, slots=True)
class FluentDateTime(FluentType):
    """Date or datetime, formatted in the locale's medium style."""

    value: date | datetime

    def format(self, ctx: FormatContext) -> str:
        locale = _babel_locale(ctx)
        if isinstance(self.value, datetime):
            return str(babel_dates.format_datetime(self.value, format=_DATE_STYLE, locale=locale))
        return str(babel_dates.format_date(self.value, format=_DATE_STYLE, locale=locale))

    def match(self, ctx: FormatContext, other: object) -> bool:
        match other:
            case FluentDateTime(value=value):
                return value == self.value
            case date():
                return other == self.value
        return False


@dataclass(frozen=True, slots=True)
class FluentSymbol(FluentType):
    """Variant name used as a key.

    Matches equal names directly. Against a number it matches the plural
    category of that number in the context's locales, so ``[one]`` selects
    1 in English.
    """

    value: str

    def format(self, ctx: FormatContext) -> str:
        return self.value

    def match(self, ctx: FormatContext, other: object) -> bool:
        match other:
            case FluentSymbol(value=value) | FluentString(value=value):
                return value == self.value
            case str():
                return other == self.value
            case FluentNumber(value=value):
                return select_category(ctx.locales, value) == self.value
        return False


type FluentArg = str | int | float | Decimal | date | datetime | FluentType
