"""Custom Functions Example - Demonstrating MessageContext.add_function() API.

This example shows how to extend ftlcontext with custom formatting functions
for domain-specific needs:

1. FILESIZE human-readable formatting
2. CURRENCY formatting with Babel, reading the context locale through a closure
3. Functions that fail: errors are reported, never raised

A function receives the resolved positional arguments as a list and the
named arguments as a dict, both holding FluentType values, and returns a
FluentType.

WARNING: Examples use use_isolating=False for cleaner terminal output.
NEVER disable bidi isolation in production applications that support RTL languages.

Python 3.13+.
"""

from __future__ import annotations

from decimal import Decimal

from babel import numbers as babel_numbers

from ftlcontext import MessageContext
from ftlcontext.runtime import FluentFunction, FluentNumber, FluentString, FluentType

_UNITS = ("B", "KB", "MB", "GB", "TB")


# Example 1: FILESIZE
def FILESIZE(  # noqa: N802
    positional: list[FluentType], named: dict[str, FluentType]
) -> FluentType:
    """Format a byte count as a human-readable size.

    FTL usage:
        download = { FILESIZE($bytes) } downloaded
    """
    if len(positional) != 1 or not isinstance(positional[0], FluentNumber):
        msg = "FILESIZE() expects one number"
        raise TypeError(msg)

    size = positional[0].number
    for unit in _UNITS[:-1]:
        if abs(size) < 1024:
            break
        size /= 1024
    else:
        unit = _UNITS[-1]
    return FluentString(f"{size.quantize(Decimal('0.1')).normalize():f} {unit}")


# Example 2: CURRENCY, bound to a context's locale
def make_currency(ctx: MessageContext) -> FluentFunction:
    """Build a CURRENCY() function that formats in ``ctx.locale``.

    FTL usage:
        price = { CURRENCY($amount, currency: "EUR") }
    """

    def CURRENCY(  # noqa: N802
        positional: list[FluentType], named: dict[str, FluentType]
    ) -> FluentType:
        if len(positional) != 1 or not isinstance(positional[0], FluentNumber):
            msg = "CURRENCY() expects one number"
            raise TypeError(msg)
        code = named.get("currency")
        currency = str(code.value) if code is not None else "USD"
        return FluentString(
            babel_numbers.format_currency(positional[0].number, currency, locale=ctx.locale)
        )

    return CURRENCY


if __name__ == "__main__":
    ctx = MessageContext("en-US", use_isolating=False)
    ctx.add_function("FILESIZE", FILESIZE)
    ctx.add_function("CURRENCY", make_currency(ctx))

    ctx.add_messages("""
download = { FILESIZE($bytes) } downloaded
price = Price: { CURRENCY($amount, currency: "EUR") }
bad-size = { FILESIZE($name) }
""")

    print("=" * 50)
    print("Example 1: FILESIZE")
    print("=" * 50)
    for size in (512, 2048, 5 * 1024 * 1024):
        result, _ = ctx.format_pattern("download", {"bytes": size})
        print(result)
    # Output:
    # 512 B downloaded
    # 2 KB downloaded
    # 5 MB downloaded

    print("\n" + "=" * 50)
    print("Example 2: CURRENCY")
    print("=" * 50)
    result, _ = ctx.format_pattern("price", {"amount": Decimal("1234.5")})
    print(result)
    # Output: Price: €1,234.50

    lv = MessageContext("lv-LV", use_isolating=False)
    lv.add_function("CURRENCY", make_currency(lv))
    lv.add_messages('price = Cena: { CURRENCY($amount, currency: "EUR") }')
    result, _ = lv.format_pattern("price", {"amount": Decimal("1234.5")})
    print(result)
    # Output: Cena: 1 234,50 €

    print("\n" + "=" * 50)
    print("Example 3: Failing Functions")
    print("=" * 50)
    result, errors = ctx.format_pattern("bad-size", {"name": "not a number"})
    print(result)
    print([str(e) for e in errors])
    # Output:
    # FILESIZE()
    # ['Function FILESIZE() failed: FILESIZE() expects one number']
