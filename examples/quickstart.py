"""Quickstart example for ftlcontext.

This example demonstrates basic usage of ftlcontext for localization.

WARNING: Examples use use_isolating=False for cleaner terminal output.
NEVER disable bidi isolation in production applications that support RTL languages.
Always use the default use_isolating=True for production code.

Note: Examples ignore the 'errors' return value for brevity except where
errors are the point. In production, always check errors and log/report
translation issues.
"""

from datetime import date
from decimal import Decimal

from ftlcontext import FluentResource, MessageContext, parse_ftl, serialize_ftl

# Example 1: Simple message
print("=" * 50)
print("Example 1: Simple Message")
print("=" * 50)

ctx = MessageContext("en-US", use_isolating=False)
ctx.add_messages("""
hello = Hello, World!
welcome = Welcome to ftlcontext!
""")

result, _ = ctx.format_pattern("hello")
print(result)
# Output: Hello, World!

result, _ = ctx.format_pattern("welcome")
print(result)
# Output: Welcome to ftlcontext!

# Example 2: Variables
print("\n" + "=" * 50)
print("Example 2: Variable Interpolation")
print("=" * 50)

ctx.add_messages("""
greeting = Hello, { $name }!
user-info = { $firstName } { $lastName } (Age: { $age })
""")

result, _ = ctx.format_pattern("greeting", {"name": "Alice"})
print(result)
# Output: Hello, Alice!

result, _ = ctx.format_pattern("user-info", {
    "firstName": "Bob",
    "lastName": "Smith",
    "age": 30
})
print(result)
# Output: Bob Smith (Age: 30)

# Example 3: Plurals (English)
print("\n" + "=" * 50)
print("Example 3: Plural Forms (English)")
print("=" * 50)

ctx.add_messages("""
emails =
    { $count ->
        [0] You have no emails.
        [one] You have one email.
       *[other] You have { $count } emails.
    }
""")

for count in (0, 1, 5):
    result, _ = ctx.format_pattern("emails", {"count": count})
    print(result)
# Output:
# You have no emails.
# You have one email.
# You have 5 emails.

# Example 4: Terms and attributes
print("\n" + "=" * 50)
print("Example 4: Terms and Attributes")
print("=" * 50)

ctx.add_messages("""
-brand = Firefox
    .gender = masculine
about = About { -brand }
login = Log in
    .title = Sign in to { -brand }
""")

result, _ = ctx.format_pattern("about")
print(result)
# Output: About Firefox

result, _ = ctx.format_pattern("login", attribute="title")
print(result)
# Output: Sign in to Firefox

print(ctx.has_message("-brand"))
# Output: False (terms are private to translations)

# Example 5: Numbers and dates in other locales
print("\n" + "=" * 50)
print("Example 5: Locale-Aware Formatting")
print("=" * 50)

de = MessageContext("de-DE", use_isolating=False)
de.add_messages("""
total = Summe: { $amount }
updated = Stand: { DATETIME($when) }
""")

result, _ = de.format_pattern("total", {"amount": Decimal("1234.50")})
print(result)
# Output: Summe: 1.234,50

result, _ = de.format_pattern("updated", {"when": date(2024, 1, 5)})
print(result)
# Output: Stand: 05.01.2024

# Example 6: Errors never raise
print("\n" + "=" * 50)
print("Example 6: Error Handling")
print("=" * 50)

errors = ctx.add_messages("""
broken = { $oops
fine = Still loaded
""")
for error in errors:
    print(f"{type(error).__name__}: {error}")
# Output: FluentParseError: E0003: Expected token: "}"

result, errors = ctx.format_pattern("greeting")
print(result)
print([str(e) for e in errors])
# Output:
# Hello, name!
# ['Unknown variable: $name']

result, errors = ctx.format_pattern("missing-message")
print(result, [str(e) for e in errors])
# Output: missing-message ['Unknown message: missing-message']

# Example 7: Resources and the syntax tree
print("\n" + "=" * 50)
print("Example 7: Resources and Serialization")
print("=" * 50)

resource = FluentResource.from_string("# Shared strings\nok = OK\ncancel = Cancel\n")
print(resource)
# Output: FluentResource(messages=2, terms=0, junk=0)

print(serialize_ftl(parse_ftl("ok    =    OK")), end="")
# Output: ok = OK
