"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data.
Select expressions use it to match a ``[one]`` or ``[few]`` key against a
number selector.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from babel.core import UnknownLocaleError

from ftlcontext.locale_utils import first_known_locale, get_babel_locale

__all__ = ["select_category", "select_plural_category"]


def _fallback_category(n: int | float | Decimal) -> str:
    # Most common pattern: n == 1 -> "one", else -> "other"
    return "one" if abs(n) == 1 else "other"


def select_plural_category(n: int | float | Decimal, locale: str) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en_US", "ar-SA")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(0, "lv_LV")
        'zero'
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(2, "ar_SA")
        'two'
        >>> select_plural_category(42, "ja_JP")
        'other'

    Architecture:
        Uses Babel's Locale.plural_form which provides CLDR-compliant plural rules
        for all supported locales. Decimal input keeps its visible fraction
        digits, so Decimal("1.0") is "other" in English while 1 is "one".

        If locale parsing fails, falls back to simple one/other rule.

    Performance:
        Uses cached locale parsing via get_babel_locale() to avoid
        repeated Locale.parse() overhead in hot paths.
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return _fallback_category(n)

    return locale_obj.plural_form(n)


def select_category(locales: Sequence[str], numeric_text: str) -> str:
    """Select the plural category of a number given as source text.

    Uses the rules of the first locale in the chain that Babel knows.

    Args:
        locales: Locale fallback chain, primary locale first
        numeric_text: Number as written, e.g. "1" or "1.50"

    Returns:
        Plural category; "other" when the text is not a number
    """
    try:
        n = Decimal(numeric_text)
    except InvalidOperation:
        return "other"

    if not n.is_finite():
        return "other"

    locale_obj = first_known_locale(locales)
    if locale_obj is None:
        return _fallback_category(n)

    return select_plural_category(n, str(locale_obj))
